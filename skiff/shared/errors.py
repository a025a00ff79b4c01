"""Error codes and exceptions for Skiff."""
from enum import Enum, auto


class ErrorCode(Enum):
    """Enumeration of all possible error codes in the application."""

    LOCALE_BIND_FAILED = auto()
    LOCALE_ENCODING_INVALID = auto()
    LOCALE_ACTIVATE_FAILED = auto()
    RESOURCE_REGISTER_FAILED = auto()
    WINDOW_CONSTRUCTION_FAILED = auto()
    WINDOW_DESTROYED = auto()
    NO_ACTIVE_WINDOW = auto()
    UNKNOWN_ACTION = auto()
    DUPLICATE_ACTION = auto()
    DEAD_HANDLER = auto()
    UNKNOWN_ERROR = auto()


class SkiffError(Exception):
    """Base exception for Skiff errors."""

    def __init__(self, code: ErrorCode, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code.name}] {message}")


class StartupError(SkiffError):
    """Raised when localization or resource setup fails before the loop starts."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(code, message)


class ConstructionError(SkiffError):
    """Raised when the runtime cannot build the main window."""

    def __init__(self, message: str):
        super().__init__(ErrorCode.WINDOW_CONSTRUCTION_FAILED, message)


class PreconditionError(SkiffError):
    """Raised on programming errors (e.g., About with no window)."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(code, message)
