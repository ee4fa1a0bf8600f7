from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "vocab_file": "data/vocabulary.json",
    "tts_provider": "edge-tts",
    "tts_voice": "",
    "elevenlabs_model": "eleven_flash_v2_5",
    "word_lang": "en-US",
    "audio_cache_dir": "audio_cache",
    "auto_narrate": True,
    "advance_delay_ms": 1000,
}


@dataclass
class Settings:
    vocab_file: str = DEFAULTS["vocab_file"]
    tts_provider: str = DEFAULTS["tts_provider"]
    tts_voice: str = DEFAULTS["tts_voice"]  # empty: pick from the language tag
    elevenlabs_model: str = DEFAULTS["elevenlabs_model"]
    word_lang: str = DEFAULTS["word_lang"]
    audio_cache_dir: str = DEFAULTS["audio_cache_dir"]
    auto_narrate: bool = DEFAULTS["auto_narrate"]
    advance_delay_ms: int = DEFAULTS["advance_delay_ms"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def vocab_full_path(self) -> Path:
        return self.project_root / self.vocab_file

    @property
    def audio_cache_full_path(self) -> Path:
        return self.project_root / self.audio_cache_dir

    def to_dict(self) -> dict:
        return {
            "vocab_file": self.vocab_file,
            "tts_provider": self.tts_provider,
            "tts_voice": self.tts_voice,
            "elevenlabs_model": self.elevenlabs_model,
            "word_lang": self.word_lang,
            "audio_cache_dir": self.audio_cache_dir,
            "auto_narrate": self.auto_narrate,
            "advance_delay_ms": self.advance_delay_ms,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
