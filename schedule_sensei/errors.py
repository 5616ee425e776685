# schedule_sensei/errors.py


class ScheduleSenseiError(Exception):
    """Base class for every error surfaced to the user."""


class ParseError(ScheduleSenseiError):
    """The uploaded file is not a usable MS Project XML export."""


class EmptyScheduleError(ScheduleSenseiError):
    def __init__(self, message: str = "No parsed schedule data to send."):
        super().__init__(message)


class MissingCredentialError(ScheduleSenseiError):
    def __init__(self, message: str = "Please enter your OpenAI API key."):
        super().__init__(message)


class UpstreamError(ScheduleSenseiError):
    """The chat-completion service answered with a non-success status."""

    def __init__(self, message: str = "OpenAI API error", status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(ScheduleSenseiError):
    """The request never got an HTTP answer (DNS, refused connection, timeout)."""
