"""TTS audio caching and voice selection."""
from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vocab_quiz.providers.base import TTSProvider

_log = logging.getLogger("vocab_quiz.audio")

DEFAULT_VOICE = "en-US-GuyNeural"

# Preferred edge-tts voice per language tag.  Bare primary subtags cover
# regional tags that have no entry of their own (e.g. "en-AU" -> "en").
VOICES = {
    "en-US": "en-US-GuyNeural",
    "en-GB": "en-GB-SoniaNeural",
    "en": "en-US-GuyNeural",
    "ko-KR": "ko-KR-SunHiNeural",
    "ko": "ko-KR-SunHiNeural",
    "ja-JP": "ja-JP-NanamiNeural",
    "ja": "ja-JP-NanamiNeural",
    "zh-CN": "zh-CN-XiaoxiaoNeural",
    "zh": "zh-CN-XiaoxiaoNeural",
    "es-ES": "es-ES-ElviraNeural",
    "es": "es-ES-ElviraNeural",
    "fr-FR": "fr-FR-DeniseNeural",
    "fr": "fr-FR-DeniseNeural",
    "de-DE": "de-DE-KatjaNeural",
    "de": "de-DE-KatjaNeural",
}


def sentence_hash(text: str) -> str:
    return hashlib.sha256(text.encode()).hexdigest()[:16]


def pick_voice(lang: str | None, preferred: str = "") -> str:
    """Choose a voice for *lang*.

    An explicitly configured voice wins.  Otherwise match the full tag
    case-insensitively, then its primary subtag, then fall back to English.
    """
    if preferred:
        return preferred
    if not lang:
        return DEFAULT_VOICE

    by_lower = {k.lower(): v for k, v in VOICES.items()}
    tag = lang.replace("_", "-").lower()
    if tag in by_lower:
        return by_lower[tag]
    primary = tag.split("-", 1)[0]
    return by_lower.get(primary, DEFAULT_VOICE)


async def get_or_create_audio(
    text: str,
    tts: TTSProvider,
    cache_dir: Path,
) -> Path | None:
    """Get cached audio or generate new TTS audio.

    The cache key covers the provider/voice as well as the text, so the same
    word narrated in two voices gets two files.  Returns None on failure.
    """
    cache_dir.mkdir(parents=True, exist_ok=True)
    h = sentence_hash(f"{tts.name()}|{text}")

    output_path = cache_dir / f"{h}.mp3"
    if output_path.exists():
        return output_path

    try:
        await tts.synthesize(text, output_path)
        return output_path
    except Exception as e:
        _log.warning("TTS error for %r: %s", text[:40], e)
        output_path.unlink(missing_ok=True)
        return None
