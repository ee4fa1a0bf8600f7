"""Tests for audio caching and voice selection."""
from __future__ import annotations

from pathlib import Path

import pytest

from vocab_quiz.audio import DEFAULT_VOICE, get_or_create_audio, pick_voice, sentence_hash


class FakeTTS:
    """Simple fake TTS that avoids AsyncMock's `name` attribute issue."""

    def __init__(self, side_effect=None, voice="fake"):
        self._side_effect = side_effect
        self.voice = voice
        self.synthesize_called = 0

    async def synthesize(self, text: str, output_path: Path) -> Path:
        self.synthesize_called += 1
        if self._side_effect:
            raise self._side_effect
        output_path.write_bytes(b"fake mp3 data")
        return output_path

    def name(self) -> str:
        return f"fake-tts/{self.voice}"


class TestSentenceHash:
    def test_deterministic(self):
        assert sentence_hash("Hello world") == sentence_hash("Hello world")

    def test_different_text_different_hash(self):
        assert sentence_hash("Hello world") != sentence_hash("Goodbye world")

    def test_hash_format(self):
        h = sentence_hash("any text here")
        assert len(h) == 16
        assert all(c in "0123456789abcdef" for c in h)


class TestPickVoice:
    def test_exact_tag(self):
        assert pick_voice("ko-KR") == "ko-KR-SunHiNeural"

    def test_case_and_underscore(self):
        assert pick_voice("en_gb") == "en-GB-SoniaNeural"

    def test_primary_subtag_fallback(self):
        assert pick_voice("en-AU") == "en-US-GuyNeural"
        assert pick_voice("ko") == "ko-KR-SunHiNeural"

    def test_unknown_language_falls_back(self):
        assert pick_voice("xx-YY") == DEFAULT_VOICE

    def test_no_language(self):
        assert pick_voice(None) == DEFAULT_VOICE
        assert pick_voice("") == DEFAULT_VOICE

    def test_preferred_wins(self):
        assert pick_voice("ko-KR", preferred="en-US-AriaNeural") == "en-US-AriaNeural"


class TestGetOrCreateAudio:
    @pytest.mark.asyncio
    async def test_creates_new_audio(self, tmp_path):
        tts = FakeTTS()
        result = await get_or_create_audio("dog", tts, tmp_path / "audio")

        assert result is not None
        assert result.exists()
        assert result.suffix == ".mp3"
        assert tts.synthesize_called == 1

    @pytest.mark.asyncio
    async def test_returns_cached(self, tmp_path):
        tts = FakeTTS()
        first = await get_or_create_audio("dog", tts, tmp_path)
        second = await get_or_create_audio("dog", tts, tmp_path)

        assert first == second
        assert tts.synthesize_called == 1

    @pytest.mark.asyncio
    async def test_voice_is_part_of_key(self, tmp_path):
        a = await get_or_create_audio("dog", FakeTTS(voice="a"), tmp_path)
        b = await get_or_create_audio("dog", FakeTTS(voice="b"), tmp_path)
        assert a != b

    @pytest.mark.asyncio
    async def test_tts_failure_returns_none(self, tmp_path):
        tts = FakeTTS(side_effect=RuntimeError("TTS unavailable"))

        result = await get_or_create_audio("dog", tts, tmp_path)
        assert result is None
        assert list(tmp_path.glob("*.mp3")) == []
