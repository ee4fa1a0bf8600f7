from __future__ import annotations

from pathlib import Path

from vocab_quiz.audio import DEFAULT_VOICE
from vocab_quiz.providers.base import TTSProvider


class EdgeTTSProvider(TTSProvider):
    def __init__(self, voice: str = DEFAULT_VOICE, rate: str = "-10%"):
        self.voice = voice
        self.rate = rate  # single words read slightly slower than normal speech

    async def synthesize(self, text: str, output_path: Path) -> Path:
        import edge_tts

        communicate = edge_tts.Communicate(text, self.voice, rate=self.rate)
        await communicate.save(str(output_path))
        return output_path

    def name(self) -> str:
        return f"edge-tts/{self.voice}"
