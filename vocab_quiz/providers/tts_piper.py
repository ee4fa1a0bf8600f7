from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from vocab_quiz.providers.base import TTSProvider

# Piper voices are separate model files, one per language
PIPER_MODELS = {
    "en": "en_US-lessac-medium",
    "ko": "ko_KR-kss-medium",
    "de": "de_DE-thorsten-medium",
    "es": "es_ES-davefx-medium",
    "fr": "fr_FR-siwis-medium",
}


class PiperTTSProvider(TTSProvider):
    def __init__(self, model: str = "", lang: str | None = None):
        primary = lang.split("-", 1)[0].lower() if lang else "en"
        self.model = model or PIPER_MODELS.get(primary, PIPER_MODELS["en"])
        if not shutil.which("piper"):
            raise RuntimeError(
                "Piper not found. Install from https://github.com/rhasspy/piper"
            )

    async def synthesize(self, text: str, output_path: Path) -> Path:
        wav_path = output_path.with_suffix(".wav")
        proc = await asyncio.create_subprocess_exec(
            "piper",
            "--model", self.model,
            "--output_file", str(wav_path),
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        await proc.communicate(input=text.encode())
        if proc.returncode != 0:
            raise RuntimeError(f"Piper failed with code {proc.returncode}")

        # Browsers get MP3; convert with ffmpeg
        proc2 = await asyncio.create_subprocess_exec(
            "ffmpeg", "-y", "-i", str(wav_path),
            "-codec:a", "libmp3lame", "-qscale:a", "2",
            str(output_path),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        await proc2.communicate()
        wav_path.unlink(missing_ok=True)
        if proc2.returncode != 0:
            raise RuntimeError(f"ffmpeg failed with code {proc2.returncode}")
        return output_path

    def name(self) -> str:
        return f"piper/{self.model}"
