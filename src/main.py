from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes.activities import router as activities_router
from src.api.routes.conversation import router as conversation_router
from src.api.routes.extract import router as extract_router
from src.core.config import settings
from src.core.errors import VolunteerLogError
from src.core.logger import get_logger

logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(activities_router, prefix="/api")
app.include_router(extract_router, prefix="/api")
app.include_router(conversation_router, prefix="/api")


@app.exception_handler(VolunteerLogError)
async def volunteer_log_error_handler(request: Request, exc: VolunteerLogError) -> JSONResponse:
    logger.info("[api] %s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
