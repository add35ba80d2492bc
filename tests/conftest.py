"""
Shared fixtures: a gateway service wired to an in-process mock provider.
"""
import json
from typing import Callable, Dict, List

import httpx
import pytest

from openai_gateway.adapters.openai_adapter import OpenAIAdapter
from openai_gateway.service import GatewayService

Handler = Callable[[httpx.Request], httpx.Response]


def chat_body(content: str) -> Dict:
    """A minimal chat completion body with one choice."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "model": "gpt-4",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


class FakeProvider:
    """
    Scripted stand-in for the OpenAI API.

    Transcripts are keyed by the uploaded audio bytes; chat answers echo the
    user message unless a handler override is set.
    """

    def __init__(self):
        self.transcripts: Dict[bytes, str] = {}
        self.requests: List[httpx.Request] = []
        self.chat_handler: Handler = None
        self.transcription_handler: Handler = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/audio/transcriptions"):
            if self.transcription_handler:
                return self.transcription_handler(request)
            for audio, text in self.transcripts.items():
                if audio in request.content:
                    return httpx.Response(200, json={"text": text})
            return httpx.Response(200, json={"text": ""})
        if request.url.path.endswith("/chat/completions"):
            if self.chat_handler:
                return self.chat_handler(request)
            payload = json.loads(request.content)
            question = payload["messages"][0]["content"]
            return httpx.Response(200, json=chat_body(f"answer: {question}"))
        return httpx.Response(404, json={"error": "not found"})

    def calls_to(self, suffix: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(suffix)]


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def adapter(provider: FakeProvider) -> OpenAIAdapter:
    return OpenAIAdapter(
        name="openai-test",
        api_key="test-key",
        transport=httpx.MockTransport(provider),
    )


@pytest.fixture
def service(adapter: OpenAIAdapter) -> GatewayService:
    return GatewayService(adapter)
