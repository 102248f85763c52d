import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from config.settings import Settings
from relay.models import Candidate, CandidateContent, GenerationResult, Part


class FakeService:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def generate_content(self, *, model, contents, system_instruction):
        self.calls.append(
            {"model": model, "contents": contents, "system_instruction": system_instruction}
        )
        if self.error is not None:
            raise self.error
        return self.result


def result_with_text(text):
    return GenerationResult(
        candidates=[Candidate(content=CandidateContent(parts=[Part(text=text)]))]
    )


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key", gemini_model="gemini-test", request_timeout=5.0)


@pytest.fixture
def fake_service():
    return FakeService(result=result_with_text("¡Hola! Soy Willy Dragoncin."))


@pytest.fixture
def client(settings, fake_service):
    return TestClient(create_app(settings, fake_service))
