"""
Provider response models and unwrappers.
"""

import json
from typing import Optional, List, Dict, Any, Union

from pydantic import BaseModel, Field, ValidationError

from ..core.errors import DecodeError


class ResponseMessage(BaseModel):
    """Message in a completion choice."""
    role: str = "assistant"
    content: Optional[str] = None


class Choice(BaseModel):
    """A single completion choice."""
    index: int = 0
    message: ResponseMessage
    finish_reason: Optional[str] = None


class ChatCompletionResponse(BaseModel):
    """Chat completion response; unknown provider fields are ignored."""
    id: str = ""
    model: str = ""
    choices: List[Choice] = Field(default_factory=list)

    @classmethod
    def from_openai(cls, data: Dict[str, Any]) -> "ChatCompletionResponse":
        """Validate a parsed provider body."""
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
        try:
            return cls.model_validate(
                {
                    "id": data.get("id") or "",
                    "model": data.get("model") or "",
                    "choices": data.get("choices") or [],
                }
            )
        except ValidationError as e:
            raise DecodeError(f"Unexpected chat completion shape: {e}") from e

    def get_content(self) -> str:
        """Get the content of the first choice, or an empty string."""
        if self.choices:
            return self.choices[0].message.content or ""
        return ""


def _load_json(body: str) -> Any:
    try:
        return json.loads(body)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e


def parse_chat_completion(body: str) -> ChatCompletionResponse:
    """Parse a raw chat completion body, raising DecodeError on bad input."""
    return ChatCompletionResponse.from_openai(_load_json(body))


def unwrap_chat_answer(raw: Union[ChatCompletionResponse, Dict[str, Any]]) -> str:
    """Return ``choices[0].message.content``, or "" when there are no choices."""
    if not isinstance(raw, ChatCompletionResponse):
        raw = ChatCompletionResponse.from_openai(raw)
    return raw.get_content()


def unwrap_transcript(body: str) -> str:
    """
    Extract the transcript text from a transcription response.

    The transcription endpoint answers ``{"text": "..."}`` in its default
    ``json`` format; the ``text`` member is the transcript.
    """
    data = _load_json(body)
    if not isinstance(data, dict) or not isinstance(data.get("text"), str):
        raise DecodeError("Transcription response has no 'text' field")
    return data["text"]
