from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from relay.errors import classify_error
from relay.models import (
    Candidate,
    CandidateContent,
    ConversationTurn,
    GenerationResult,
    Part,
    SystemInstruction,
)


logger = logging.getLogger(__name__)


def to_lc_messages(
    system_instruction: SystemInstruction, contents: List[ConversationTurn]
) -> List[BaseMessage]:
    messages: List[BaseMessage] = []
    system_text = "".join(part.text for part in system_instruction.parts)
    if system_text:
        messages.append(SystemMessage(content=system_text))
    for turn in contents:
        if turn.role == "model":
            messages.append(AIMessage(content=turn.text))
        else:
            messages.append(HumanMessage(content=turn.text))
    return messages


def _message_text(message: AIMessage) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    chunks = []
    for block in content or []:
        if isinstance(block, str):
            chunks.append(block)
        elif isinstance(block, dict) and block.get("type", "text") == "text":
            chunks.append(block.get("text") or "")
    return "".join(chunks)


def to_generation_result(message: AIMessage) -> GenerationResult:
    text = _message_text(message)
    if not text:
        return GenerationResult(candidates=[])
    finish_reason = (message.response_metadata or {}).get("finish_reason")
    return GenerationResult(
        candidates=[
            Candidate(
                content=CandidateContent(parts=[Part(text=text)]),
                finish_reason=str(finish_reason) if finish_reason is not None else None,
            )
        ]
    )


class GeminiGenerationService:
    """GenerationService backed by ``ChatGoogleGenerativeAI``."""

    def __init__(self, api_key: str, timeout: Optional[float] = None) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._models: Dict[str, ChatGoogleGenerativeAI] = {}

    def _llm(self, model: str) -> ChatGoogleGenerativeAI:
        llm = self._models.get(model)
        if llm is None:
            llm = ChatGoogleGenerativeAI(
                model=model,
                google_api_key=self._api_key,
                timeout=self._timeout,
                max_retries=0,
            )
            self._models[model] = llm
        return llm

    async def generate_content(
        self,
        *,
        model: str,
        contents: List[ConversationTurn],
        system_instruction: SystemInstruction,
    ) -> GenerationResult:
        messages = to_lc_messages(system_instruction, contents)
        try:
            response: Any = await self._llm(model).ainvoke(messages)
        except Exception as exc:
            logger.exception("Error calling the Gemini API: %s", exc)
            raise classify_error(exc) from exc
        return to_generation_result(response)
