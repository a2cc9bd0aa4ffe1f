from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    app_name: str = "volunteer-activity-log"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    database_url: str | None = None
    mysql_host: str = "127.0.0.1"
    mysql_port: int = 3306
    mysql_user: str = "root"
    mysql_password: str = ""
    mysql_db: str = "volunteer_activity_log"

    log_level: str = "INFO"

    llm_enabled: bool = False
    llm_api_key: str | None = None
    llm_api_base: str = "https://api-inference.huggingface.co"
    llm_generation_model: str = "openai-community/gpt2"
    llm_ner_model: str = "dbmdz/bert-large-cased-finetuned-conll03-english"
    llm_zero_shot_model: str = "facebook/bart-large-mnli"
    llm_timeout_seconds: float = 10.0
    llm_max_attempts: int = 2
    llm_zero_shot_threshold: float = 0.3

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
    )

    @property
    def mysql_host_resolved(self) -> str:
        host = (self.mysql_host or "").strip()
        if host.lower() in {"localhost", "::1", "[::1]"}:
            return "127.0.0.1"
        return host

    @property
    def database_dsn(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"mysql+pymysql://{self.mysql_user}:{self.mysql_password}"
            f"@{self.mysql_host_resolved}:{self.mysql_port}/{self.mysql_db}"
        )


settings = Settings()
