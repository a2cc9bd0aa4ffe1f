from src.dialogue.controller import (
    COMPLETION_MESSAGE,
    acknowledge,
    completion_reply,
    next_question,
    save_failed_reply,
    summarize,
)
from src.extraction.pipeline.types import REQUIRED_FIELDS


def test_next_question_follows_priority_not_field_order():
    question = next_question(["location", "date"], {"name": "Sarah"})

    assert question == "Thanks Sarah! Where did this volunteering take place? (4/6 complete)"


def test_kid_count_is_asked_before_location():
    question = next_question(["location", "number_of_kids"], {})

    assert question.startswith("How many kids did you help or work with?")


def test_single_missing_field_has_no_progress_suffix():
    assert next_question(["date"], {"name": "Sarah"}) == "Almost done Sarah! When did this happen?"


def test_name_question_is_never_personalized():
    question = next_question(list(REQUIRED_FIELDS), {"name": ""})

    assert question.startswith("Hi there! What's your name?")
    assert question.endswith("(0/6 complete)")


def test_nothing_missing_returns_completion_text():
    assert next_question([], {"name": "Sarah"}) == COMPLETION_MESSAGE


def test_summarize_full_record(complete_record):
    assert summarize(complete_record) == (
        "Sarah did teaching with 12 kids at Community Hall (Hope Center) on yesterday"
    )


def test_summarize_omits_absent_clauses():
    assert summarize({"name": "Sarah", "date": "Monday"}) == "Sarah on Monday"


def test_acknowledge_lists_found_fields():
    message = acknowledge({"name": "Sarah", "activity_type": "teaching", "number_of_kids": 12})

    assert message == "Great! I got name: Sarah, activity: teaching, 12 kids. "
    assert acknowledge({}) == "Thanks for that! "


def test_completion_and_failure_replies(complete_record):
    assert "Here's what I recorded: Sarah did teaching" in completion_reply(complete_record)
    assert "error saving your activity: disk full. Please try again" in save_failed_reply("disk full")
