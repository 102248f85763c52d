from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from config.settings import Settings
from relay.core.prompt import SYSTEM_PROMPT
from relay.errors import (
    TIMEOUT_MESSAGE,
    ConfigurationError,
    EmptyGenerationError,
    RelayError,
    UpstreamError,
    ValidationError,
    classify_error,
)
from relay.models import (
    ConversationTurn,
    GenerationRequest,
    GenerationResponse,
    Part,
    SystemInstruction,
)
from relay.services.base import GenerationService


logger = logging.getLogger(__name__)


def build_contents(request: GenerationRequest) -> List[ConversationTurn]:
    """Return the history followed by the new user turn.

    A caller that already appended the message as the last user turn does not
    get it twice.
    """
    contents = list(request.history)
    if contents and contents[-1].role == "user" and contents[-1].text == request.user_message:
        return contents
    contents.append(ConversationTurn(role="user", parts=[Part(text=request.user_message)]))
    return contents


class ChatRelay:
    """Forwards one chat message to the GenerationService under the persona."""

    def __init__(
        self,
        settings: Settings,
        service: Optional[GenerationService],
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self._settings = settings
        self._service = service
        self._system_instruction = SystemInstruction(parts=[Part(text=system_prompt)])

    @property
    def configured(self) -> bool:
        return self._settings.api_key_configured and self._service is not None

    def parse(self, payload: Any) -> GenerationRequest:
        if not isinstance(payload, dict):
            raise ValidationError()
        try:
            return GenerationRequest.model_validate(payload)
        except PydanticValidationError as exc:
            logger.info(
                "Rejected request: %s",
                [(err["loc"], err["msg"]) for err in exc.errors(include_url=False)],
            )
            raise ValidationError() from exc

    async def handle(self, payload: Any) -> GenerationResponse:
        if not self.configured:
            logger.error("Attempted use without a Gemini API key.")
            raise ConfigurationError()

        request = self.parse(payload)
        contents = build_contents(request)
        logger.info(
            "Incoming chat: history_turns=%s message_len=%s",
            len(request.history),
            len(request.user_message),
        )

        try:
            result = await asyncio.wait_for(
                self._service.generate_content(
                    model=self._settings.gemini_model,
                    contents=contents,
                    system_instruction=self._system_instruction,
                ),
                timeout=self._settings.request_timeout,
            )
        except RelayError:
            raise
        except asyncio.TimeoutError as exc:
            logger.error("Gemini call timed out after %ss", self._settings.request_timeout)
            raise UpstreamError(TIMEOUT_MESSAGE) from exc
        except Exception as exc:
            logger.exception("Error calling the Gemini API: %s", exc)
            raise classify_error(exc) from exc

        text = result.first_text()
        if not text:
            logger.warning("Empty or filtered AI response: %s", result.model_dump())
            raise EmptyGenerationError()

        logger.info("Model responded with %s chars", len(text))
        return GenerationResponse(text=text)
