"""
Ordered processing over uploaded audio files.
"""

import logging
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar

from .service import GatewayService

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def process_in_order(
    items: Iterable[T],
    operation: Callable[[T], Awaitable[R]],
    keep: Optional[Callable[[R], bool]] = None,
) -> List[R]:
    """
    Run ``operation`` over ``items`` one at a time, in order.

    Args:
        items: Inputs to process
        operation: Coroutine function applied to each item
        keep: Predicate selecting which results are returned; all by default

    Returns:
        Kept results in input order
    """
    results: List[R] = []
    for index, item in enumerate(items):
        result = await operation(item)
        if keep is None or keep(result):
            results.append(result)
        else:
            logger.debug(f"Dropped result for item {index}")
    return results


def _non_empty(value: str) -> bool:
    return bool(value)


async def summarize_audio_files(service: GatewayService, files: Iterable[bytes]) -> str:
    """Transcribe each file and join the non-empty transcripts, one per line."""
    transcripts = await process_in_order(files, service.transcribe_audio, keep=_non_empty)
    return "".join(f"{transcript}\n" for transcript in transcripts)


async def answer_questions_from_audio_files(
    service: GatewayService, files: Iterable[bytes]
) -> List[str]:
    """
    Transcribe each file and answer the non-empty transcripts as questions.

    Files with an empty transcript contribute nothing, so the result can be
    shorter than ``files``. A failed transcription yields its non-empty
    failure message (``"<ErrorType>: <message>"``, which may carry the
    provider's error body), and that message is sent to the provider as the
    question for that file.
    """

    async def transcribe_and_answer(audio: bytes) -> Optional[str]:
        question = await service.transcribe_audio(audio)
        if not question:
            return None
        return await service.answer_question(question)

    return await process_in_order(
        files, transcribe_and_answer, keep=lambda answer: answer is not None
    )
