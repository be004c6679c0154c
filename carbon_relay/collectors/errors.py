"""Error types for headline sources and candidate searchers."""

from enum import Enum


class SourceErrorClass(str, Enum):
    """Classification of source errors.

    - UNKNOWN_SOURCE: Requested source key is not registered
    - FETCH: Source content could not be read
    - PARSE: Source content could not be parsed
    """

    UNKNOWN_SOURCE = "UNKNOWN_SOURCE"
    FETCH = "FETCH"
    PARSE = "PARSE"


class SourceError(Exception):
    """Base exception for source errors.

    Provides structured error information for logging and status reporting.
    """

    def __init__(
        self,
        error_class: SourceErrorClass,
        message: str,
        source_key: str | None = None,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        """Initialize the source error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            source_key: Registry key of the source that failed.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.source_key = source_key
        self.details = details or {}

    def to_dict(
        self,
    ) -> dict[str, str | int | bool | None | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "source_key": self.source_key,
            "details": self.details,
        }


class UnknownSourceError(SourceError):
    """Raised when a source key has no registered implementation."""

    def __init__(self, source_key: str, known_keys: list[str] | None = None) -> None:
        """Initialize the error.

        Args:
            source_key: The unknown key.
            known_keys: Keys that are registered.
        """
        known = ", ".join(known_keys or []) or "none"
        super().__init__(
            error_class=SourceErrorClass.UNKNOWN_SOURCE,
            message=f"Unknown source key '{source_key}' (registered: {known})",
            source_key=source_key,
        )


class SourceFetchError(SourceError):
    """Error reading content from a source."""

    def __init__(
        self,
        message: str,
        source_key: str | None = None,
        path: str | None = None,
    ) -> None:
        """Initialize the fetch error.

        Args:
            message: Human-readable error message.
            source_key: Registry key of the source that failed.
            path: File or location that could not be read.
        """
        super().__init__(
            error_class=SourceErrorClass.FETCH,
            message=message,
            source_key=source_key,
            details={"path": path} if path is not None else None,
        )
        self.path = path


class SourceParseError(SourceError):
    """Error parsing content from a source.

    Raised when content cannot be parsed (malformed JSON, unexpected shape).
    """

    def __init__(
        self,
        message: str,
        source_key: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize the parse error.

        Args:
            message: Human-readable error message.
            source_key: Registry key of the source that failed.
            line: Line number where parsing failed.
            column: Column number where parsing failed.
        """
        details: dict[str, str | int | bool | None] = {}
        if line is not None:
            details["line"] = line
        if column is not None:
            details["column"] = column

        super().__init__(
            error_class=SourceErrorClass.PARSE,
            message=message,
            source_key=source_key,
            details=details,
        )
        self.line = line
        self.column = column
