"""Tests for TTS provider selection by language tag."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from vocab_quiz import app as app_module
from vocab_quiz.config import Settings
from vocab_quiz.providers.tts_edge import EdgeTTSProvider
from vocab_quiz.providers.tts_elevenlabs import DEFAULT_VOICE_ID, ElevenLabsProvider
from vocab_quiz.providers.tts_piper import PIPER_MODELS, PiperTTSProvider


@pytest.fixture
def primed_settings():
    """Install a Settings object as the app's global and restore it afterwards."""
    previous = app_module._settings
    settings = Settings()
    app_module._settings = settings
    yield settings
    app_module._settings = previous


@pytest.fixture
def piper_installed():
    with patch("vocab_quiz.providers.tts_piper.shutil.which", return_value="/usr/bin/piper"):
        yield


@pytest.fixture
def elevenlabs_sdk():
    with patch.dict("sys.modules", {"elevenlabs": MagicMock()}):
        yield


class TestEdgeSelection:
    def test_voice_from_language(self, primed_settings):
        tts = app_module._get_tts("ko-KR")
        assert isinstance(tts, EdgeTTSProvider)
        assert tts.voice == "ko-KR-SunHiNeural"
        assert tts.name() == "edge-tts/ko-KR-SunHiNeural"

    def test_configured_voice_wins(self, primed_settings):
        primed_settings.tts_voice = "en-GB-RyanNeural"
        assert app_module._get_tts("ko-KR").voice == "en-GB-RyanNeural"


class TestPiperSelection:
    def test_model_from_primary_subtag(self, primed_settings, piper_installed):
        primed_settings.tts_provider = "piper"
        tts = app_module._get_tts("ko-KR")
        assert isinstance(tts, PiperTTSProvider)
        assert tts.model == PIPER_MODELS["ko"]

    def test_unknown_language_uses_english(self, primed_settings, piper_installed):
        primed_settings.tts_provider = "piper"
        assert app_module._get_tts("xx-YY").model == PIPER_MODELS["en"]
        assert app_module._get_tts(None).model == PIPER_MODELS["en"]

    def test_configured_model_wins(self, primed_settings, piper_installed):
        primed_settings.tts_provider = "piper"
        primed_settings.tts_voice = "custom-model"
        tts = app_module._get_tts("de-DE")
        assert tts.model == "custom-model"
        assert tts.name() == "piper/custom-model"

    def test_missing_binary(self, primed_settings):
        primed_settings.tts_provider = "piper"
        with patch("vocab_quiz.providers.tts_piper.shutil.which", return_value=None):
            with pytest.raises(RuntimeError, match="Piper not found"):
                app_module._get_tts("en-US")


class TestElevenLabsSelection:
    def test_language_code(self, primed_settings, elevenlabs_sdk):
        primed_settings.tts_provider = "elevenlabs"
        tts = app_module._get_tts("ko-KR")
        assert isinstance(tts, ElevenLabsProvider)
        assert tts.language_code == "ko"
        assert tts.voice_id == DEFAULT_VOICE_ID
        assert tts.model_id == primed_settings.elevenlabs_model
        assert tts.name() == f"elevenlabs/{DEFAULT_VOICE_ID}/ko"

    def test_no_language(self, primed_settings, elevenlabs_sdk):
        primed_settings.tts_provider = "elevenlabs"
        primed_settings.tts_voice = "voice123"
        tts = app_module._get_tts(None)
        assert tts.language_code is None
        assert tts.name() == "elevenlabs/voice123"


class TestUnknownProvider:
    def test_raises(self, primed_settings):
        primed_settings.tts_provider = "speak-n-spell"
        with pytest.raises(ValueError, match="Unknown TTS provider"):
            app_module._get_tts("en-US")

    @pytest.mark.asyncio
    async def test_narration_degrades(self, primed_settings):
        primed_settings.tts_provider = "speak-n-spell"
        assert await app_module._narrate("dog", "en-US") is None
