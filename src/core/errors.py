class VolunteerLogError(Exception):
    """Base error for failures that are reported back to a caller."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class IncompleteActivityError(VolunteerLogError):
    status_code = 400

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(f"Missing required fields: {', '.join(self.missing_fields)}")


class ConversationBusyError(VolunteerLogError):
    status_code = 409

    def __init__(self, conversation_id: str):
        self.conversation_id = conversation_id
        super().__init__(f"Conversation {conversation_id} is still processing the previous message")


class ConversationNotFoundError(VolunteerLogError):
    status_code = 404

    def __init__(self, conversation_id: str):
        self.conversation_id = conversation_id
        super().__init__(f"Conversation {conversation_id} not found")


class RemoteClassifierError(VolunteerLogError):
    """Raised by remote strategies; never escapes the remote classifier."""

    status_code = 502
