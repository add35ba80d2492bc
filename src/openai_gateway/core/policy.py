"""
Per-operation error policies.

Each gateway operation converts provider failures into a caller-visible
result according to one named policy.
"""

import logging
from enum import Enum
from typing import Awaitable, Callable, Dict

logger = logging.getLogger(__name__)


class ErrorPolicy(str, Enum):
    """How an operation turns a failure into a result."""
    PROPAGATE = "propagate"
    RETURN_EMPTY = "return_empty"
    RETURN_MESSAGE = "return_message"


OPERATION_POLICIES: Dict[str, ErrorPolicy] = {
    "transcribe_audio": ErrorPolicy.RETURN_MESSAGE,
    "answer_question": ErrorPolicy.PROPAGATE,
    "summarize_text": ErrorPolicy.RETURN_EMPTY,
    "extract_text_from_image": ErrorPolicy.RETURN_MESSAGE,
}


def describe_error(exc: Exception) -> str:
    """Render an exception as the string returned under RETURN_MESSAGE."""
    return f"{type(exc).__name__}: {exc}"


async def apply_policy(
    policy: ErrorPolicy,
    operation: str,
    call: Callable[[], Awaitable[str]],
) -> str:
    """
    Await ``call`` and apply ``policy`` to any failure.

    Only ``Exception`` subclasses are converted; cancellation and other
    ``BaseException`` types always propagate.

    Args:
        policy: Policy to apply
        operation: Operation name used in log records
        call: Zero-argument coroutine factory performing the provider call

    Returns:
        The call result, or the policy's substitute on failure
    """
    try:
        return await call()
    except Exception as e:
        if policy is ErrorPolicy.PROPAGATE:
            logger.error(f"{operation} failed: {e}")
            raise
        if policy is ErrorPolicy.RETURN_EMPTY:
            logger.warning(f"{operation} failed, returning empty result: {e}")
            return ""
        logger.warning(f"{operation} failed, returning error message: {e}")
        return describe_error(e)
