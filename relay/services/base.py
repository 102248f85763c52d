from __future__ import annotations

from typing import List, Protocol

from relay.models import ConversationTurn, GenerationResult, SystemInstruction


class GenerationService(Protocol):
    """Upstream text generation capability.

    Implementations raise ``AuthenticationError``, ``RateLimitError`` or
    ``UpstreamError`` from ``relay.errors`` instead of provider exceptions.
    """

    async def generate_content(
        self,
        *,
        model: str,
        contents: List[ConversationTurn],
        system_instruction: SystemInstruction,
    ) -> GenerationResult:
        raise NotImplementedError
