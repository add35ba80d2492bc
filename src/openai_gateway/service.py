"""
Gateway operations.

Each operation builds one provider payload, issues one call through the
adapter, unwraps the result and applies its ErrorPolicy.
"""

import logging
from typing import Dict, Optional

from .adapters.openai_adapter import OpenAIAdapter
from .core.config import DEFAULT_CHAT_MODEL, DEFAULT_TRANSCRIPTION_MODEL, ProviderConfig
from .core.policy import ErrorPolicy, OPERATION_POLICIES, apply_policy
from .models.request import build_audio_form, build_chat_payload, build_image_payload
from .models.response import parse_chat_completion, unwrap_chat_answer, unwrap_transcript

logger = logging.getLogger(__name__)

QUESTION_TEMPLATE = "Please provide an answer to the question: {question}"

SUMMARY_TEMPLATE = (
    "Below is a paragraph containing information. "
    "Please write a summary paragraph that will inform the reader of the important information in the paragraph. "
    "All of the information in the summary should be factual and relevant. "
    "Here is the paragraph content: {paragraph} "
)


def question_instructions(question: str) -> str:
    return QUESTION_TEMPLATE.format(question=question)


def summary_instructions(paragraph: str) -> str:
    return SUMMARY_TEMPLATE.format(paragraph=paragraph)


class GatewayService:
    """
    The four caller-facing operations.

    Instances hold no per-request state; concurrent calls share only the
    adapter's connection pool.
    """

    def __init__(
        self,
        adapter: OpenAIAdapter,
        chat_model: str = DEFAULT_CHAT_MODEL,
        transcription_model: str = DEFAULT_TRANSCRIPTION_MODEL,
        policies: Optional[Dict[str, ErrorPolicy]] = None,
    ):
        self.adapter = adapter
        self.chat_model = chat_model
        self.transcription_model = transcription_model
        self.policies = dict(OPERATION_POLICIES)
        if policies:
            self.policies.update(policies)

    @classmethod
    def from_config(cls, config: ProviderConfig, adapter: Optional[OpenAIAdapter] = None) -> "GatewayService":
        return cls(
            adapter=adapter or OpenAIAdapter.from_config(config),
            chat_model=config.chat_model,
            transcription_model=config.transcription_model,
        )

    def policy_for(self, operation: str) -> ErrorPolicy:
        return self.policies.get(operation, ErrorPolicy.PROPAGATE)

    async def _complete(self, instructions: str) -> str:
        body = await self.adapter.chat_completion(
            build_chat_payload(instructions, model=self.chat_model)
        )
        return unwrap_chat_answer(parse_chat_completion(body))

    async def transcribe_audio(self, audio_bytes: bytes) -> str:
        """Transcribe one audio clip; failures come back as a message string."""

        async def call() -> str:
            form = build_audio_form(audio_bytes, model=self.transcription_model)
            return unwrap_transcript(await self.adapter.transcribe(form))

        return await apply_policy(self.policy_for("transcribe_audio"), "transcribe_audio", call)

    async def answer_question(self, question: str) -> str:
        """Answer a question; provider failures are raised to the caller."""
        instructions = question_instructions(question)
        return await apply_policy(
            self.policy_for("answer_question"),
            "answer_question",
            lambda: self._complete(instructions),
        )

    async def summarize_text(self, paragraph: str) -> str:
        """Summarize a paragraph; any failure yields an empty string."""
        return await self.generate_from_instructions(summary_instructions(paragraph))

    async def generate_from_instructions(self, instructions: str) -> str:
        """Send pre-built instructions under the summary policy."""
        return await apply_policy(
            self.policy_for("summarize_text"),
            "summarize_text",
            lambda: self._complete(instructions),
        )

    async def extract_text_from_image(self, base64_image: str) -> str:
        """
        Ask the provider to extract text from a base64 PNG.

        The raw provider body is returned without unwrapping.
        """

        async def call() -> str:
            payload = build_image_payload(base64_image, model=self.chat_model)
            return await self.adapter.chat_completion(payload)

        return await apply_policy(
            self.policy_for("extract_text_from_image"), "extract_text_from_image", call
        )

    async def close(self) -> None:
        await self.adapter.disconnect()
