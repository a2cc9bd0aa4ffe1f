import os

# Keep the suite off any real database or inference endpoint.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LLM_ENABLED", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.extraction.extractors.llm import RemoteClassifier
from src.extraction.pipeline.types import ActivityRecord
from src.services.activity_service import init_db

SARAH_TEXT = "Hi I'm Sarah, I taught 12 kids at Hope Center yesterday"

COMPLETE_FIELDS = {
    "name": "Sarah",
    "activity_type": "teaching",
    "location": "Community Hall",
    "number_of_kids": 12,
    "youth_house": "Hope Center",
    "date": "yesterday",
}


@pytest.fixture
def sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine):
    return sessionmaker(bind=sqlite_engine, autoflush=False, autocommit=False)


@pytest.fixture
def offline_classifier() -> RemoteClassifier:
    return RemoteClassifier(enabled=False)


@pytest.fixture
def complete_record() -> ActivityRecord:
    return ActivityRecord.from_partial(COMPLETE_FIELDS)
