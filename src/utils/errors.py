from __future__ import annotations


class PromptDesignerError(Exception):
    """Base class for errors surfaced to callers of the designer."""

    status_code: int = 500
    default_message: str = "Unexpected error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(PromptDesignerError):
    status_code = 400
    default_message = "Invalid input"


class Unauthorized(PromptDesignerError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidCredentials(PromptDesignerError):
    status_code = 401
    default_message = "Invalid credentials"


class CapacityExceeded(PromptDesignerError):
    status_code = 403
    default_message = "Template limit reached"


class NotFound(PromptDesignerError):
    status_code = 404
    default_message = "Template not found"


class DuplicateId(PromptDesignerError):
    status_code = 409
    default_message = "Template with this id already exists"


class EmailAlreadyRegistered(PromptDesignerError):
    status_code = 409
    default_message = "Email already registered"


class EnhancerUnavailable(PromptDesignerError):
    status_code = 500
    default_message = "Prompt enhancer is not configured"


class EnhancerFailure(PromptDesignerError):
    """Raised by enhancers; absorbed by the generation workflow."""

    status_code = 502
    default_message = "Prompt enhancement failed"
