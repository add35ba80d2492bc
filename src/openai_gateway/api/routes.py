"""
REST API routes for the OpenAI gateway.
"""

import logging
from typing import Optional, List

from fastapi import APIRouter, Body, File, HTTPException, Query, UploadFile
from pydantic import BaseModel

from ..batch import answer_questions_from_audio_files, summarize_audio_files
from ..core.errors import ConfigurationError, GatewayError, HttpStatusError
from ..service import GatewayService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/API", tags=["openai"])


# Set by the main app
_service: Optional[GatewayService] = None


def set_dependencies(service: Optional[GatewayService]):
    """Set dependencies from main app."""
    global _service
    _service = service


def _require_service() -> GatewayService:
    if not _service:
        raise HTTPException(status_code=503, detail="Service not ready: provider is not configured")
    return _service


class ParagraphRequest(BaseModel):
    paragraph: str


class QuestionRequest(BaseModel):
    question: str


class ImageRequest(BaseModel):
    image: str  # base64 encoded image


async def _read_all(files: List[UploadFile]) -> List[bytes]:
    contents = []
    for upload in files:
        contents.append(await upload.read())
    return contents


@router.post("/GenerateParagraphSummary", response_model=str)
async def generate_paragraph_summary(
    paragraph: Optional[str] = Query(default=None),
    body: Optional[ParagraphRequest] = Body(default=None),
):
    """Summarize a paragraph. Provider failures produce an empty string."""
    service = _require_service()
    text = paragraph if paragraph is not None else (body.paragraph if body else None)
    if text is None:
        raise HTTPException(status_code=422, detail="'paragraph' is required")
    return await service.summarize_text(text)


@router.post("/GenerateSummaryForAudioFiles", response_model=str)
async def generate_summary_for_audio_files(audioFiles: List[UploadFile] = File(...)):
    """Transcribe every uploaded file and join the transcripts, one per line."""
    service = _require_service()
    contents = await _read_all(audioFiles)
    logger.info(f"Transcribing {len(contents)} audio file(s)")
    return await summarize_audio_files(service, contents)


@router.post("/GenerateAnswerForQuestion", response_model=str)
async def generate_answer_for_question(
    question: Optional[str] = Query(default=None),
    body: Optional[QuestionRequest] = Body(default=None),
):
    """Answer a question."""
    service = _require_service()
    text = question if question is not None else (body.question if body else None)
    if text is None:
        raise HTTPException(status_code=422, detail="'question' is required")
    try:
        return await service.answer_question(text)
    except GatewayError as e:
        raise _to_http_exception(e) from e


@router.post("/GenerateAnswerForQuestionInAudio", response_model=List[str])
async def generate_answers_for_question_in_audio_files(audioFiles: List[UploadFile] = File(...)):
    """Answer the question spoken in each uploaded file, skipping silent ones."""
    service = _require_service()
    contents = await _read_all(audioFiles)
    logger.info(f"Answering questions from {len(contents)} audio file(s)")
    try:
        return await answer_questions_from_audio_files(service, contents)
    except GatewayError as e:
        raise _to_http_exception(e) from e


@router.post("/ExtractTextFromImage", response_model=str)
async def extract_text_from_image(request: ImageRequest):
    """Return the provider's raw response for a text extraction request."""
    service = _require_service()
    return await service.extract_text_from_image(request.image)


def _to_http_exception(error: GatewayError) -> HTTPException:
    if isinstance(error, ConfigurationError):
        return HTTPException(status_code=503, detail=error.message)
    if isinstance(error, HttpStatusError):
        return HTTPException(
            status_code=502,
            detail=f"Provider returned {error.status_code}: {error.message}",
        )
    return HTTPException(status_code=502, detail=f"Provider error: {error.message}")
