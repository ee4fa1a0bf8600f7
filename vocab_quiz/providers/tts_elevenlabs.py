from __future__ import annotations

import asyncio
import os
from pathlib import Path

from vocab_quiz.providers.base import TTSProvider

DEFAULT_VOICE_ID = "lfBVYbXnblkOddWFfEIg"


class ElevenLabsProvider(TTSProvider):
    def __init__(
        self,
        voice_id: str = DEFAULT_VOICE_ID,
        model_id: str = "eleven_flash_v2_5",
        lang: str | None = None,
    ):
        from elevenlabs import ElevenLabs
        self.client = ElevenLabs(
            api_key=os.environ.get("ELEVEN_LABS_API_KEY", ""),
        )
        self.voice_id = voice_id or DEFAULT_VOICE_ID
        self.model_id = model_id
        # ISO 639-1 code; the multilingual models accept it as a hint
        self.language_code = lang.split("-", 1)[0].lower() if lang else None

    async def synthesize(self, text: str, output_path: Path) -> Path:
        from elevenlabs.types import VoiceSettings

        def _generate():
            audio = self.client.text_to_speech.convert(
                voice_id=self.voice_id,
                text=text,
                model_id=self.model_id,
                language_code=self.language_code,
                output_format="mp3_44100_128",
                voice_settings=VoiceSettings(
                    stability=0.6,
                    similarity_boost=0.75,
                    speed=0.9,
                ),
            )
            # audio is a generator of bytes
            with open(output_path, "wb") as f:
                for chunk in audio:
                    f.write(chunk)
            return output_path

        return await asyncio.get_running_loop().run_in_executor(None, _generate)

    def name(self) -> str:
        lang = f"/{self.language_code}" if self.language_code else ""
        return f"elevenlabs/{self.voice_id}{lang}"
