"""Errors raised while relaying a chat message.

Every error carries the HTTP status and the user-facing message the API
layer sends back as ``{"error": message}``.
"""

from __future__ import annotations

from typing import Optional


MISSING_API_KEY_MESSAGE = (
    "La clave API de Gemini no está configurada en el servidor (GEMINI_API_KEY)."
)
MISSING_USER_MESSAGE = "El campo 'userMessage' es obligatorio."
AUTHENTICATION_MESSAGE = (
    "Error de autenticación: La clave API de Gemini es inválida o expiró."
)
RATE_LIMIT_MESSAGE = (
    "Límite de velocidad excedido (Rate Limit). Inténtalo de nuevo más tarde."
)
EMPTY_GENERATION_MESSAGE = (
    "La IA no pudo generar una respuesta (posiblemente filtrada o vacía)."
)
GENERIC_ERROR_MESSAGE = "Error interno del servidor al procesar la solicitud."
TIMEOUT_MESSAGE = "La API de Gemini no respondió a tiempo."


class RelayError(Exception):
    status_code: int = 500
    default_message: str = GENERIC_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(RelayError):
    """The Gemini credential is missing."""

    status_code = 500
    default_message = MISSING_API_KEY_MESSAGE


class ValidationError(RelayError):
    status_code = 400
    default_message = MISSING_USER_MESSAGE


class AuthenticationError(RelayError):
    """Gemini rejected the configured key."""

    status_code = 401
    default_message = AUTHENTICATION_MESSAGE


class RateLimitError(RelayError):
    status_code = 429
    default_message = RATE_LIMIT_MESSAGE


class EmptyGenerationError(RelayError):
    """Gemini answered without usable text (empty or filtered)."""

    status_code = 500
    default_message = EMPTY_GENERATION_MESSAGE


class UpstreamError(RelayError):
    """Any other Gemini failure; its message is passed to the client as-is."""

    status_code = 500


AUTH_MARKERS = ("API key", "API_KEY_INVALID")
RATE_LIMIT_MARKERS = ("RATE_LIMIT", "RESOURCE_EXHAUSTED")


def _status_code(exc: BaseException) -> Optional[int]:
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        for attr in ("status_code", "code"):
            value = getattr(current, attr, None)
            if isinstance(value, int):
                return value
        current = current.__cause__ or current.__context__
    return None


def classify_error(exc: BaseException) -> RelayError:
    """Map an upstream exception onto the relay error taxonomy.

    Only a 401 or an explicit key marker counts as an authentication failure;
    other denials (e.g. a 403 for a disabled API) keep their own message.
    """
    if isinstance(exc, RelayError):
        return exc
    message = str(exc)
    status = _status_code(exc)
    if status == 401 or any(marker in message for marker in AUTH_MARKERS):
        return AuthenticationError()
    if status == 429 or any(marker in message for marker in RATE_LIMIT_MARKERS):
        return RateLimitError()
    return UpstreamError(message or None)
