import asyncio
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from sqlalchemy.orm import sessionmaker

from src.core.errors import ConversationBusyError, ConversationNotFoundError, IncompleteActivityError
from src.core.logger import get_logger
from src.dialogue import controller
from src.dialogue.slots import is_complete, missing_fields
from src.extraction.extractors.llm import RemoteClassifier
from src.extraction.pipeline.runner import submit_utterance
from src.extraction.pipeline.types import ActivityRecord, ExtractionResult
from src.services.activity_service import AppendResult, append_activity

logger = get_logger(__name__)


@dataclass
class Conversation:
    conversation_id: str
    record: ActivityRecord = field(default_factory=ActivityRecord)
    turns: list[str] = field(default_factory=list)
    awaiting_confirmation: bool = False
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)


@dataclass(slots=True)
class TurnOutcome:
    message: str
    extracted: ExtractionResult
    data: ExtractionResult
    missing_fields: list[str]
    is_complete: bool


@dataclass(slots=True)
class SaveOutcome:
    success: bool
    message: str
    row_number: int | None = None
    error: str | None = None


Appender = Callable[..., AppendResult]


class ConversationService:
    """Owns in-progress activity records, one per conversation.

    At most one extraction runs per conversation; a second submission while
    one is in flight is rejected rather than queued.
    """

    def __init__(
        self,
        *,
        classifier: RemoteClassifier | None = None,
        session_factory: sessionmaker | None = None,
        appender: Appender = append_activity,
    ):
        self.classifier = classifier or RemoteClassifier()
        self.session_factory = session_factory
        self.appender = appender
        self._conversations: dict[str, Conversation] = {}

    def start(self, conversation_id: str | None = None) -> Conversation:
        conversation_id = conversation_id or uuid.uuid4().hex
        conversation = Conversation(conversation_id=conversation_id)
        self._conversations[conversation_id] = conversation
        logger.info("[conversation] started id=%s", conversation_id)
        return conversation

    def get(self, conversation_id: str) -> Conversation:
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            raise ConversationNotFoundError(conversation_id)
        return conversation

    async def submit(self, conversation_id: str, text: str) -> TurnOutcome:
        conversation = self.get(conversation_id)
        if conversation.lock.locked():
            logger.warning("[conversation] rejected overlapping turn id=%s", conversation_id)
            raise ConversationBusyError(conversation_id)

        async with conversation.lock:
            prior_turns = list(conversation.turns)
            extracted = await submit_utterance(
                text,
                prior_turns,
                classifier=self.classifier,
                known_organization=conversation.record.youth_house,
            )
            updated = conversation.record.merge(extracted)
            conversation.turns.append(text)

            missing = missing_fields(conversation.record)
            complete = not missing
            conversation.awaiting_confirmation = complete
            if complete:
                message = controller.completion_reply(conversation.record)
            else:
                message = controller.acknowledge(extracted) + controller.next_question(missing, conversation.record)

            logger.info(
                "[conversation] id=%s turn=%s updated=%s missing=%s",
                conversation_id,
                len(conversation.turns),
                updated,
                missing,
            )
            return TurnOutcome(
                message=message,
                extracted=extracted,
                data=conversation.record.as_dict(),
                missing_fields=missing,
                is_complete=complete,
            )

    async def save(self, conversation_id: str) -> SaveOutcome:
        conversation = self.get(conversation_id)
        if conversation.lock.locked():
            raise ConversationBusyError(conversation_id)

        async with conversation.lock:
            if not is_complete(conversation.record):
                raise IncompleteActivityError(missing_fields(conversation.record))

            # The store call is blocking; keep it off the event loop.
            if self.session_factory is not None:
                result = await asyncio.to_thread(
                    self.appender, conversation.record, session_factory=self.session_factory
                )
            else:
                result = await asyncio.to_thread(self.appender, conversation.record)

            if not result.success:
                # The record stays so the user can retry.
                error = result.error or "unknown error"
                return SaveOutcome(success=False, message=controller.save_failed_reply(error), error=error)

            name = conversation.record.name
            conversation.record.reset()
            conversation.turns.clear()
            conversation.awaiting_confirmation = False
            message = f"{controller.saved_reply(result.row_number, name)} {controller.NEW_ACTIVITY_PROMPT}"
            return SaveOutcome(success=True, message=message, row_number=result.row_number)

    def reset(self, conversation_id: str) -> Conversation:
        conversation = self.get(conversation_id)
        conversation.record.reset()
        conversation.turns.clear()
        conversation.awaiting_confirmation = False
        logger.info("[conversation] reset id=%s", conversation_id)
        return conversation

    def end(self, conversation_id: str) -> None:
        """Discard the conversation and its in-progress record."""
        if self._conversations.pop(conversation_id, None) is None:
            raise ConversationNotFoundError(conversation_id)
        logger.info("[conversation] ended id=%s", conversation_id)


_service: ConversationService | None = None


def get_conversation_service() -> ConversationService:
    global _service
    if _service is None:
        _service = ConversationService()
    return _service
