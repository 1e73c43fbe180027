# Custom exceptions for mjforge

class MjforgeError(Exception):
    """Base exception for all application-specific errors."""
    error_kind = None


class MarkupParseError(MjforgeError):
    """Raised when markup text is not well-formed."""
    error_kind = "parse"

    def __init__(self, source_label: str, message: str):
        self.source_label = source_label
        self.message = message
        super().__init__(f"Failed to parse {source_label}: {message}")


class ComponentNotFoundError(MjforgeError):
    """Raised when no element carries the requested logical id."""
    error_kind = "not_found"

    def __init__(self, logical_id: str, detail: str = ""):
        self.logical_id = logical_id
        message = f'Component with ID "{logical_id}" not found'
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class ContentValidationError(MjforgeError):
    """Raised when new content violates the content policy."""
    error_kind = "validation"

    def __init__(self, message: str, limit: int = None):
        self.limit = limit
        super().__init__(message)


class InvalidRequestError(MjforgeError):
    """Raised when a mutation request is missing required parameters."""
    error_kind = "invalid_request"


class ConfigError(MjforgeError):
    """Raised for configuration-related problems."""
    pass
