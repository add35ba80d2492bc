"""
Unit tests for ordered batch processing of audio files.
"""
import json

import httpx
import pytest

from openai_gateway.batch import (
    answer_questions_from_audio_files,
    process_in_order,
    summarize_audio_files,
)
from openai_gateway.core.errors import TransportError


class TestProcessInOrder:
    """Test the generic ordered processor."""

    @pytest.mark.asyncio
    async def test_preserves_order(self):
        seen = []

        async def op(item):
            seen.append(item)
            return item * 2

        assert await process_in_order([3, 1, 2], op) == [6, 2, 4]
        assert seen == [3, 1, 2]

    @pytest.mark.asyncio
    async def test_keep_filters(self):
        async def op(item):
            return item

        result = await process_in_order(["a", "", "b"], op, keep=bool)
        assert result == ["a", "b"]

    @pytest.mark.asyncio
    async def test_empty_input(self):
        async def op(item):
            raise AssertionError("not called")

        assert await process_in_order([], op) == []


class TestSummarizeAudioFiles:
    """Test transcript concatenation."""

    @pytest.mark.asyncio
    async def test_skips_empty_transcripts(self, service, provider):
        provider.transcripts = {b"clip-1": "Hello", b"clip-2": "", b"clip-3": "World"}
        result = await summarize_audio_files(service, [b"clip-1", b"clip-2", b"clip-3"])
        assert result == "Hello\nWorld\n"
        assert len(provider.calls_to("/audio/transcriptions")) == 3

    @pytest.mark.asyncio
    async def test_no_files(self, service):
        assert await summarize_audio_files(service, []) == ""

    @pytest.mark.asyncio
    async def test_failed_file_records_marker_and_continues(self, service, provider):
        def handler(request):
            if b"clip-bad" in request.content:
                return httpx.Response(500, text="boom")
            return httpx.Response(200, json={"text": "fine"})

        provider.transcription_handler = handler
        result = await summarize_audio_files(service, [b"clip-bad", b"clip-ok"])
        lines = result.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("HttpStatusError:")
        assert lines[1] == "fine"


class TestAnswerQuestionsFromAudioFiles:
    """Test spoken question answering."""

    @pytest.mark.asyncio
    async def test_skips_silent_files(self, service, provider):
        provider.transcripts = {b"clip-1": "", b"clip-2": "What time is it?"}
        answers = await answer_questions_from_audio_files(service, [b"clip-1", b"clip-2"])
        assert answers == ["answer: Please provide an answer to the question: What time is it?"]
        assert len(provider.calls_to("/chat/completions")) == 1

    @pytest.mark.asyncio
    async def test_order_preserved(self, service, provider):
        provider.transcripts = {b"clip-a": "First?", b"clip-b": "Second?"}
        answers = await answer_questions_from_audio_files(service, [b"clip-b", b"clip-a"])
        assert [a.rsplit(" ", 1)[-1] for a in answers] == ["Second?", "First?"]

    @pytest.mark.asyncio
    async def test_answer_failure_propagates(self, service, provider):
        provider.transcripts = {b"clip-1": "Why?"}

        def down(request):
            raise httpx.ConnectError("connection reset", request=request)

        provider.chat_handler = down
        with pytest.raises(TransportError):
            await answer_questions_from_audio_files(service, [b"clip-1"])

    @pytest.mark.asyncio
    async def test_failed_transcription_is_asked_as_question(self, service, provider):
        """A transcription failure message is forwarded as the question."""
        provider.transcription_handler = lambda r: httpx.Response(500, text="upstream detail")
        answers = await answer_questions_from_audio_files(service, [b"clip-1"])
        chat_calls = provider.calls_to("/chat/completions")
        assert len(chat_calls) == 1
        question = json.loads(chat_calls[0].content)["messages"][0]["content"]
        assert "HttpStatusError: " in question
        assert "upstream detail" in question
        assert answers == [f"answer: {question}"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
