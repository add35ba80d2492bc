"""
Outbound request models and payload builders.
"""

from typing import Optional, List, Dict, Any, Literal, Tuple
from pydantic import BaseModel, Field

from ..core.config import DEFAULT_CHAT_MODEL, DEFAULT_TRANSCRIPTION_MODEL

# Sampling parameters are fixed for every gateway call.
TEMPERATURE = 1.0
MAX_TOKENS = 1000
TOP_P = 1.0
FREQUENCY_PENALTY = 0.0
PRESENCE_PENALTY = 0.0

IMAGE_INSTRUCTIONS = "Extract text from image."
IMAGE_MIME_TYPE = "image/png"

AUDIO_FIELD_NAME = "file"
AUDIO_FILE_NAME = "audio.mp3"
AUDIO_CONTENT_TYPE = "application/octet-stream"


class ChatMessage(BaseModel):
    """A single chat message."""
    role: Literal["system", "user", "assistant"] = "user"
    content: str


class ChatRequest(BaseModel):
    """
    Chat completion request in the provider's wire shape.

    Every field is always serialized; there are no optional sampling fields.
    """
    model: str = Field(..., description="Model identifier")
    messages: List[ChatMessage] = Field(..., description="Conversation messages")
    temperature: float
    max_tokens: int
    top_p: float
    frequency_penalty: float
    presence_penalty: float

    def to_openai_format(self) -> Dict[str, Any]:
        """Convert to the JSON body sent to the chat completions endpoint."""
        return self.model_dump(mode="json")


class ImagePayload(BaseModel):
    """Base64 image attached to a chat request."""
    data: str
    mime_type: str = IMAGE_MIME_TYPE

    def to_openai_format(self) -> Dict[str, Any]:
        return {"image": self.data, "mime_type": self.mime_type}


class ImageChatRequest(BaseModel):
    """A chat request plus an optional image attachment."""
    request: ChatRequest
    image: Optional[ImagePayload] = None

    def to_openai_format(self) -> Dict[str, Any]:
        """Flatten to the chat body with an extra ``image`` member."""
        data = self.request.to_openai_format()
        if self.image is not None:
            data["image"] = self.image.to_openai_format()
        return data


class AudioForm(BaseModel):
    """Multipart form for the transcription endpoint."""
    content: bytes
    model: str = DEFAULT_TRANSCRIPTION_MODEL
    file_name: str = AUDIO_FILE_NAME
    content_type: str = AUDIO_CONTENT_TYPE

    def to_httpx(self) -> Tuple[Dict[str, Any], Dict[str, str]]:
        """Return ``(files, data)`` arguments for ``httpx`` multipart upload."""
        files = {AUDIO_FIELD_NAME: (self.file_name, self.content, self.content_type)}
        data = {"model": self.model}
        return files, data


def build_chat_payload(instructions: str, model: str = DEFAULT_CHAT_MODEL) -> ChatRequest:
    """Wrap ``instructions`` as the sole user message with fixed sampling."""
    return ChatRequest(
        model=model,
        messages=[ChatMessage(role="user", content=instructions)],
        temperature=TEMPERATURE,
        max_tokens=MAX_TOKENS,
        top_p=TOP_P,
        frequency_penalty=FREQUENCY_PENALTY,
        presence_penalty=PRESENCE_PENALTY,
    )


def build_image_payload(base64_image: str, model: str = DEFAULT_CHAT_MODEL) -> ImageChatRequest:
    """Build the text extraction request for a base64 PNG image."""
    return ImageChatRequest(
        request=build_chat_payload(IMAGE_INSTRUCTIONS, model=model),
        image=ImagePayload(data=base64_image, mime_type=IMAGE_MIME_TYPE),
    )


def build_audio_form(audio_bytes: bytes, model: str = DEFAULT_TRANSCRIPTION_MODEL) -> AudioForm:
    """Package raw audio bytes for the transcription endpoint."""
    return AudioForm(content=audio_bytes, model=model)
