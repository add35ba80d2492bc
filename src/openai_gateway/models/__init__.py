"""
Request and response models.
"""

from .request import (
    ChatMessage,
    ChatRequest,
    ImagePayload,
    ImageChatRequest,
    AudioForm,
    build_chat_payload,
    build_image_payload,
    build_audio_form,
)
from .response import (
    ChatCompletionResponse,
    Choice,
    ResponseMessage,
    parse_chat_completion,
    unwrap_chat_answer,
    unwrap_transcript,
)

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ImagePayload",
    "ImageChatRequest",
    "AudioForm",
    "build_chat_payload",
    "build_image_payload",
    "build_audio_form",
    "ChatCompletionResponse",
    "Choice",
    "ResponseMessage",
    "parse_chat_completion",
    "unwrap_chat_answer",
    "unwrap_transcript",
]
