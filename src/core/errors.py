# src/core/errors.py — v1
"""Error taxonomy shared by the codec, the analysis client and the HTTP layer.

Every error carries the ErrorKind it maps to, the HTTP status code the
endpoint answers with, and a user-facing message that is safe to return
verbatim. Provider details never reach ``message``.
"""

from __future__ import annotations

from glucolens.core.models import ErrorKind

CONFIGURATION_ERROR_MESSAGE = (
    "Anthropic API key is not configured. "
    "Set ANTHROPIC_API_KEY in the environment or in the .env file."
)
PROVIDER_ERROR_MESSAGE = "Error processing the image with the Claude API"
MISSING_INPUT_MESSAGE = "No image was provided"
BAD_REQUEST_MESSAGE = "The uploaded image could not be read"


class GlucolensError(Exception):
    """Base class for all analysis errors."""

    kind: ErrorKind = ErrorKind.PROVIDER
    status_code: int = 500
    default_message: str = PROVIDER_ERROR_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingInputError(GlucolensError):
    """No image was supplied."""

    kind = ErrorKind.MISSING_INPUT
    status_code = 400
    default_message = MISSING_INPUT_MESSAGE


class BadRequestError(GlucolensError):
    """The upload is present but cannot be turned into an image payload."""

    kind = ErrorKind.BAD_REQUEST
    status_code = 400
    default_message = BAD_REQUEST_MESSAGE


class ConfigurationError(GlucolensError):
    """Credential absent or placeholder, or settings internally inconsistent."""

    kind = ErrorKind.CONFIGURATION
    status_code = 500
    default_message = CONFIGURATION_ERROR_MESSAGE


class ProviderError(GlucolensError):
    """Any failure of the model call: network, auth, rate limit, API status."""

    kind = ErrorKind.PROVIDER
    status_code = 500
    default_message = PROVIDER_ERROR_MESSAGE


_ERRORS_BY_KIND: dict[ErrorKind, type[GlucolensError]] = {
    ErrorKind.MISSING_INPUT: MissingInputError,
    ErrorKind.BAD_REQUEST: BadRequestError,
    ErrorKind.CONFIGURATION: ConfigurationError,
    ErrorKind.PROVIDER: ProviderError,
}


def error_for_kind(kind: ErrorKind, message: str | None = None) -> GlucolensError:
    """Build the exception instance matching an ErrorKind."""
    return _ERRORS_BY_KIND[kind](message)
