"""
OpenAI Gateway

A thin HTTP gateway in front of the OpenAI API:
- Fixed-template chat completions for summaries and answers
- Whisper transcription of uploaded audio
- Ordered batch processing of audio files
- Per-operation error policies
"""

from .core.config import GatewayConfig, ProviderConfig, load_config
from .core.errors import (
    GatewayError,
    ConfigurationError,
    TransportError,
    HttpStatusError,
    DecodeError,
)
from .core.policy import ErrorPolicy
from .adapters.openai_adapter import OpenAIAdapter
from .service import GatewayService
from .batch import process_in_order, summarize_audio_files, answer_questions_from_audio_files

__all__ = [
    "GatewayConfig",
    "ProviderConfig",
    "load_config",
    "GatewayError",
    "ConfigurationError",
    "TransportError",
    "HttpStatusError",
    "DecodeError",
    "ErrorPolicy",
    "OpenAIAdapter",
    "GatewayService",
    "process_in_order",
    "summarize_audio_files",
    "answer_questions_from_audio_files",
]
