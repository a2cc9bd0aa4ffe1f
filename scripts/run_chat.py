#!/usr/bin/env python3
import argparse
import asyncio
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.core.errors import VolunteerLogError
from src.dialogue.controller import GREETING
from src.extraction.extractors.llm import RemoteClassifier
from src.extraction.pipeline.types import ROW_COLUMNS
from src.services.activity_service import AppendResult, append_activity, init_db
from src.services.conversation_service import ConversationService

SAVE_WORDS = {"save", "yes", "y"}
QUIT_WORDS = {"quit", "exit"}


def _dry_run_append(record, **_kwargs) -> AppendResult:
    row = dict(zip(ROW_COLUMNS, record.to_row(datetime.now(timezone.utc))))
    print("Dry run only. Pass --commit to write to DB. Row that would be written:")
    print(json.dumps(row, ensure_ascii=True))
    return AppendResult(success=True, row_number=None)


async def main() -> None:
    parser = argparse.ArgumentParser(
        description=(
            "Log a volunteering activity through a terminal chat. "
            "Type 'save' once everything is collected, 'reset' to start over, 'quit' to leave."
        )
    )
    parser.add_argument(
        "--commit",
        action="store_true",
        help="When set, 'save' appends the activity to the database.",
    )
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Enable remote model extraction (requires LLM_API_KEY).",
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create the activity table before starting.",
    )
    args = parser.parse_args()

    if args.init_db:
        init_db()

    service = ConversationService(
        classifier=RemoteClassifier(enabled=args.remote),
        appender=append_activity if args.commit else _dry_run_append,
    )
    conversation = service.start()
    print(f"Assistant: {GREETING}")

    while True:
        try:
            text = input("You: ").strip()
        except EOFError:
            break
        if not text:
            continue

        command = text.lower()
        if command in QUIT_WORDS:
            break
        try:
            if command == "reset":
                service.reset(conversation.conversation_id)
                print("Assistant: Okay, starting over. What's your name and tell me about what you did!")
            elif command in SAVE_WORDS and conversation.awaiting_confirmation:
                outcome = await service.save(conversation.conversation_id)
                print(f"Assistant: {outcome.message}")
            else:
                outcome = await service.submit(conversation.conversation_id, text)
                print(f"Assistant: {outcome.message}")
        except VolunteerLogError as exc:
            print(f"Assistant: {exc.message}")


if __name__ == "__main__":
    asyncio.run(main())
