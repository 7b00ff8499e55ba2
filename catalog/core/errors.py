"""
Exception hierarchy for the board-game catalog.

Every error carries a stable machine-checkable ``code`` (see :class:`ErrorCode`),
a human-readable message and a ``details`` dict with the relevant identifiers,
so UI layers can branch on ``error.code`` without string matching.

Validation-style errors are also used as plain values: the domain validator
and the filter validator return lists of them instead of raising.
"""

from enum import Enum
from typing import Any, Iterable, Optional


class ErrorCode(str, Enum):
    # Validation
    MISSING_MANDATORY_FIELD = "MISSING_MANDATORY_FIELD"
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"
    INVALID_PLAYER_RANGE = "INVALID_PLAYER_RANGE"
    AT_LEAST_ONE_IMAGE_REQUIRED = "AT_LEAST_ONE_IMAGE_REQUIRED"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    # Repository
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    GAME_ARCHIVED_NOT_VISIBLE = "GAME_ARCHIVED_NOT_VISIBLE"
    DATA_LOAD_FAILURE = "DATA_LOAD_FAILURE"
    # Filtering / sorting / mapping
    EMPTY_FILTER_VALUES = "EMPTY_FILTER_VALUES"
    INVALID_FILTER_VALUE = "INVALID_FILTER_VALUE"
    UNSUPPORTED_SORT_MODE = "UNSUPPORTED_SORT_MODE"
    GAME_REQUIRED = "GAME_REQUIRED"
    # Archive
    GAME_ALREADY_ARCHIVED = "GAME_ALREADY_ARCHIVED"
    GAME_NOT_ARCHIVED = "GAME_NOT_ARCHIVED"
    MISSING_ARCHIVE_FLAG = "MISSING_ARCHIVE_FLAG"
    # Admin
    DUPLICATE_GAME_ID = "DUPLICATE_GAME_ID"
    INVALID_GAME_DATA = "INVALID_GAME_DATA"
    OPERATION_FAILED = "OPERATION_FAILED"
    # Persistence
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    WRITE_CONFLICT = "WRITE_CONFLICT"
    REPOSITORY_UNAVAILABLE = "REPOSITORY_UNAVAILABLE"
    INVALID_PATH = "INVALID_PATH"
    UNKNOWN_PERSISTENCE_ERROR = "UNKNOWN_PERSISTENCE_ERROR"


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    code: ErrorCode = ErrorCode.OPERATION_FAILED

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Render the error for a UI or JSON response."""
        return {"code": self.code.value, "message": self.message, **self.details}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, details={self.details!r})"


# ============================================================================
# Validation Errors
# ============================================================================


class MissingMandatoryField(CatalogError):
    """A mandatory field is absent, blank or of the wrong type."""

    code = ErrorCode.MISSING_MANDATORY_FIELD

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing mandatory field: {field}", {"field": field})
        self.field = field


class InvalidEnumValue(CatalogError):
    """A field holds a value outside its allowed set."""

    code = ErrorCode.INVALID_ENUM_VALUE

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(
            f"Invalid enum value for {field}: {value!s}",
            {"field": field, "value": value},
        )
        self.field = field
        self.value = value


class InvalidPlayerRange(CatalogError):
    """minPlayers is greater than maxPlayers."""

    code = ErrorCode.INVALID_PLAYER_RANGE

    def __init__(self, min_players: Any = None, max_players: Any = None) -> None:
        super().__init__(
            "minPlayers must be <= maxPlayers",
            {
                "field": "minPlayers/maxPlayers",
                "min_players": min_players,
                "max_players": max_players,
            },
        )
        self.field = "minPlayers/maxPlayers"


class AtLeastOneImageRequired(CatalogError):
    """The images list is empty."""

    code = ErrorCode.AT_LEAST_ONE_IMAGE_REQUIRED

    def __init__(self) -> None:
        super().__init__("At least one image is required", {"field": "images"})
        self.field = "images"


class ValidationFailed(CatalogError):
    """Raised by the game factory when raw input does not validate."""

    code = ErrorCode.VALIDATION_FAILED

    def __init__(self, errors: Iterable[CatalogError]) -> None:
        self.errors = list(errors)
        codes = [error.code.value for error in self.errors]
        super().__init__(
            f"Invalid Game data: {', '.join(codes)}",
            {"errors": [error.to_dict() for error in self.errors]},
        )


# ============================================================================
# Repository Errors
# ============================================================================


class GameNotFound(CatalogError):
    """No game with the requested id exists."""

    code = ErrorCode.GAME_NOT_FOUND

    def __init__(self, game_id: str) -> None:
        super().__init__(f"Game not found: {game_id}", {"game_id": game_id})
        self.game_id = game_id


class GameArchivedNotVisible(CatalogError):
    """The game exists but is archived and hidden from visitors."""

    code = ErrorCode.GAME_ARCHIVED_NOT_VISIBLE

    def __init__(self, game_id: str) -> None:
        super().__init__(
            f"Game {game_id} is archived and not visible in visitor context",
            {"game_id": game_id},
        )
        self.game_id = game_id


class DataLoadFailure(CatalogError):
    """The injected loader failed or returned something other than a list."""

    code = ErrorCode.DATA_LOAD_FAILURE

    def __init__(self, reason: Optional[str] = None) -> None:
        message = f"Data loading failed: {reason}" if reason else "Data loading failed"
        super().__init__(message, {"reason": reason})
        self.reason = reason


# ============================================================================
# Filtering / Sorting / Mapping Errors
# ============================================================================


class EmptyFilterValues(CatalogError):
    code = ErrorCode.EMPTY_FILTER_VALUES

    def __init__(self, filter_name: str) -> None:
        super().__init__(
            f"Filter {filter_name} has empty values", {"filter_name": filter_name}
        )
        self.filter_name = filter_name


class InvalidFilterValue(CatalogError):
    code = ErrorCode.INVALID_FILTER_VALUE

    def __init__(self, filter_name: str, value: Any) -> None:
        super().__init__(
            f"Invalid value for filter {filter_name}: {value!s}",
            {"filter_name": filter_name, "value": value},
        )
        self.filter_name = filter_name
        self.value = value


class UnsupportedSortMode(CatalogError):
    code = ErrorCode.UNSUPPORTED_SORT_MODE

    def __init__(self, mode: Any) -> None:
        super().__init__(f'Sort mode "{mode}" is not supported.', {"sort_mode": mode})
        self.mode = mode


class GameRequired(CatalogError):
    code = ErrorCode.GAME_REQUIRED

    def __init__(self) -> None:
        super().__init__("A game is required")


# ============================================================================
# Archive Errors
# ============================================================================


class GameAlreadyArchived(CatalogError):
    code = ErrorCode.GAME_ALREADY_ARCHIVED

    def __init__(self, game_id: Optional[str]) -> None:
        super().__init__(f"Game {game_id} is already archived", {"game_id": game_id})
        self.game_id = game_id


class GameNotArchived(CatalogError):
    code = ErrorCode.GAME_NOT_ARCHIVED

    def __init__(self, game_id: Optional[str]) -> None:
        super().__init__(f"Game {game_id} is not archived", {"game_id": game_id})
        self.game_id = game_id


class MissingArchiveFlag(CatalogError):
    code = ErrorCode.MISSING_ARCHIVE_FLAG

    def __init__(self) -> None:
        super().__init__("Game must have a boolean archived field")


# ============================================================================
# Admin Errors
# ============================================================================


class DuplicateGameId(CatalogError):
    code = ErrorCode.DUPLICATE_GAME_ID

    def __init__(self, game_id: str) -> None:
        super().__init__(f"Game ID already exists: {game_id}", {"game_id": game_id})
        self.game_id = game_id


class InvalidGameData(CatalogError):
    """Admin input rejected before any persistence call."""

    code = ErrorCode.INVALID_GAME_DATA

    def __init__(self, reason: Optional[str] = None, errors: Iterable[CatalogError] = ()) -> None:
        self.errors = list(errors)
        super().__init__(
            reason or "Invalid game data",
            {"errors": [error.to_dict() for error in self.errors]},
        )


class OperationFailed(CatalogError):
    """A persistence call failed; the original error is chained as ``__cause__``."""

    code = ErrorCode.OPERATION_FAILED

    def __init__(self, operation: str, game_id: Optional[str], cause: Exception) -> None:
        cause_code = getattr(cause, "code", None)
        super().__init__(
            f"{operation} failed for game {game_id}: {cause}",
            {
                "operation": operation,
                "game_id": game_id,
                "cause_code": cause_code.value if isinstance(cause_code, ErrorCode) else cause_code,
            },
        )
        self.operation = operation
        self.game_id = game_id


# ============================================================================
# Persistence Errors
# ============================================================================


class PersistenceError(CatalogError):
    """Base exception for store adapters."""

    code = ErrorCode.UNKNOWN_PERSISTENCE_ERROR


class AuthenticationError(PersistenceError):
    code = ErrorCode.AUTHENTICATION_ERROR

    def __init__(self, reason: Optional[str] = None) -> None:
        super().__init__(reason or "Authentication with the storage backend failed")


class WriteConflict(PersistenceError):
    code = ErrorCode.WRITE_CONFLICT

    def __init__(self, game_id: str) -> None:
        super().__init__(f"Write conflict detected for game {game_id}", {"game_id": game_id})
        self.game_id = game_id


class RepositoryUnavailable(PersistenceError):
    code = ErrorCode.REPOSITORY_UNAVAILABLE

    def __init__(self) -> None:
        super().__init__("The storage backend is temporarily unavailable")


class InvalidPath(PersistenceError):
    code = ErrorCode.INVALID_PATH

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid storage path: {path}", {"path": path})
        self.path = path


class UnknownPersistenceError(PersistenceError):
    code = ErrorCode.UNKNOWN_PERSISTENCE_ERROR

    def __init__(self, original: Any = None) -> None:
        super().__init__(
            "An unexpected persistence error occurred",
            {"original_error": str(original) if original is not None else None},
        )
