from relay.services.base import GenerationService
from relay.services.gemini import GeminiGenerationService

__all__ = ["GenerationService", "GeminiGenerationService"]
