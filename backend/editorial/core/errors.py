"""Error taxonomy for translation runs.

Every error a run can surface carries a stable ``category`` so callers
(HTTP routes, the NDJSON stream, the CLI) can present it consistently and
decide whether retrying the whole run makes sense.
"""


class TranslationError(Exception):
    """Base class for all expected translation run failures."""

    category: str = "internal"
    status_code: int = 500
    default_message: str = "Translation failed"

    def __init__(self, message: str = "", *, detail: str = ""):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "category": self.category}


# =============================================================================
# Precondition Errors (rejected before any remote call)
# =============================================================================


class PreconditionError(TranslationError):
    """Invalid input, e.g. no paragraphs to translate."""

    category = "precondition"
    status_code = 400
    default_message = "paragraphs is required"


class MissingCredentialError(PreconditionError):
    """No usable API key is configured for the LLM provider."""

    category = "configuration"
    status_code = 503
    default_message = (
        "LLM API key is not configured. Set DEEPSEEK_API_KEY in the environment "
        "or in .env.local"
    )


# =============================================================================
# Remote Engine Errors
# =============================================================================


class LLMError(TranslationError):
    """Base class for failures reported by the remote engine."""

    category = "service"
    status_code = 502
    default_message = "LLM API call failed"


class AuthError(LLMError):
    """Credential rejected by the provider (invalid or expired key)."""

    category = "auth"
    default_message = "API key is invalid or expired, check DEEPSEEK_API_KEY"


class RateLimitError(LLMError):
    """Provider is throttling requests."""

    category = "rate_limit"
    status_code = 429
    default_message = "Too many requests, please try again later"


class ServiceError(LLMError):
    """Any other non-success status, timeout, or transport failure."""


# =============================================================================
# Response Errors
# =============================================================================


class MalformedResponseError(TranslationError):
    """The first chunk's response did not contain a translation array."""

    category = "malformed_response"
    status_code = 502
    default_message = "Malformed model response, please retry"
