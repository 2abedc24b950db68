from typing import List, Optional


class GenerationError(Exception):
    """Base class for every failure surfaced by the generation core.

    ``status_code`` is the HTTP status the web layer reports and ``label`` the
    short machine-readable ``error`` field of the response body.
    """

    status_code = 500
    label = "Generation failed"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(GenerationError):
    status_code = 400
    label = "Validation failed"

    def __init__(self, message: str, details: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.details = list(details or [message])


class ConfigError(GenerationError):
    status_code = 401
    label = "Configuration error"


class AuthError(GenerationError):
    status_code = 401
    label = "Authentication failed"


class QuotaError(GenerationError):
    label = "Quota exceeded"


class RateLimitError(GenerationError):
    status_code = 429
    label = "Rate limit exceeded"


class NetworkError(GenerationError):
    label = "Service unreachable"


class GenerationTimeoutError(GenerationError):
    label = "Generation timed out"


class RemoteServiceError(GenerationError):
    label = "Remote service error"


class MalformedResponseError(GenerationError):
    label = "Malformed response"


class StructureError(GenerationError):
    label = "Invalid response structure"
