"""FastAPI application with all routes."""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse

from vocab_quiz.audio import get_or_create_audio, pick_voice
from vocab_quiz.config import Settings, load_settings, save_settings
from vocab_quiz.models import VocabularyTable
from vocab_quiz.parsers.vocabulary_parser import load_vocabulary
from vocab_quiz.providers.base import TTSProvider
from vocab_quiz.question_generator import GroupNotFoundError
from vocab_quiz.quiz import QuizFinishedError, QuizSession, confetti_burst

app = FastAPI(title="Vocab Quiz")

_log = logging.getLogger("vocab_quiz.api")

# Global state (initialized in startup)
_vocabulary: VocabularyTable | None = None
_settings: Settings | None = None
_active_sessions: dict[str, QuizSession] = {}  # session_id -> session


def get_vocabulary() -> VocabularyTable:
    assert _vocabulary is not None
    return _vocabulary


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def _get_tts(lang: str | None) -> TTSProvider:
    s = get_settings()
    if s.tts_provider == "edge-tts":
        from vocab_quiz.providers.tts_edge import EdgeTTSProvider
        return EdgeTTSProvider(voice=pick_voice(lang, s.tts_voice))
    elif s.tts_provider == "elevenlabs":
        from vocab_quiz.providers.tts_elevenlabs import ElevenLabsProvider
        return ElevenLabsProvider(voice_id=s.tts_voice, model_id=s.elevenlabs_model, lang=lang)
    elif s.tts_provider == "piper":
        from vocab_quiz.providers.tts_piper import PiperTTSProvider
        return PiperTTSProvider(model=s.tts_voice, lang=lang)
    raise ValueError(f"Unknown TTS provider: {s.tts_provider}")


async def _narrate(text: str, lang: str | None) -> str | None:
    """Best-effort narration: returns the audio hash, or None on any failure."""
    try:
        tts = _get_tts(lang)
        path = await get_or_create_audio(text, tts, get_settings().audio_cache_full_path)
    except Exception as e:
        _log.warning("Narration unavailable: %s", e)
        return None
    return path.stem if path else None


def _get_session(session_id: str) -> QuizSession:
    session = _active_sessions.get(session_id)
    if session is None:
        raise HTTPException(404, "Session not found")
    return session


@app.on_event("startup")
async def startup():
    global _vocabulary, _settings
    if _vocabulary is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    _vocabulary = load_vocabulary(_settings.vocab_full_path)


@app.on_event("shutdown")
async def shutdown():
    _active_sessions.clear()


# ── API: Groups ───────────────────────────────────────────────────────────

@app.get("/api/groups")
async def api_groups():
    return [
        {"group": group, "count": len(entries)}
        for group, entries in get_vocabulary().items()
    ]


# ── API: Quiz flow ────────────────────────────────────────────────────────

def _result_payload(session: QuizSession) -> dict:
    result = session.result()
    payload = result.to_dict()
    if result.celebrate:
        payload["confetti"] = confetti_burst()
    return payload


async def _question_payload(session_id: str) -> dict:
    session = _get_session(session_id)
    question = session.current_question
    if question is None:
        return {"session_id": session_id, "finished": True, "result": _result_payload(session)}

    s = get_settings()
    word_audio_hash = await _narrate(question.word, s.word_lang) if s.auto_narrate else None

    return {
        "session_id": session_id,
        "finished": False,
        "group": session.group,
        "word": question.word,
        "options": question.options,
        "word_audio_hash": word_audio_hash,
        "progress": {
            "current": session.current_index + 1,
            "total": session.total,
            "answered": session.current_index,
            "score": session.score,
            "percent": round(session.progress, 1),
        },
    }


@app.post("/api/quiz/start")
async def api_quiz_start(request: Request):
    body = await request.json()
    group = body.get("group", "")

    try:
        session = QuizSession.start(get_vocabulary(), group)
    except GroupNotFoundError as e:
        _log.info("Quiz start refused: %s", e)
        raise HTTPException(404, str(e))

    session_id = uuid.uuid4().hex
    _active_sessions[session_id] = session
    return await _question_payload(session_id)


@app.post("/api/quiz/answer")
async def api_quiz_answer(request: Request):
    body = await request.json()
    session = _get_session(body.get("session_id", ""))
    selected = body.get("selected")
    if not isinstance(selected, str):
        raise HTTPException(400, "No selection provided")

    try:
        answer = session.answer(selected)
    except QuizFinishedError as e:
        raise HTTPException(400, str(e))

    result = {
        "correct": answer.correct,
        "selected": answer.selected,
        "correct_meaning": answer.correct_meaning,
        "finished": answer.finished,
        "advance_delay_ms": get_settings().advance_delay_ms,
        "score": session.score,
    }
    if answer.finished:
        result["result"] = _result_payload(session)
    return result


@app.post("/api/quiz/next")
async def api_quiz_next(request: Request):
    body = await request.json()
    return await _question_payload(body.get("session_id", ""))


@app.post("/api/quiz/restart")
async def api_quiz_restart(request: Request):
    body = await request.json()
    session = _active_sessions.pop(body.get("session_id", ""), None)
    return {"discarded": session is not None}


# ── API: Narration ────────────────────────────────────────────────────────

@app.post("/api/narrate")
async def api_narrate(request: Request):
    body = await request.json()
    text = body.get("text", "").strip()
    if not text:
        raise HTTPException(400, "No text provided")
    lang = body.get("lang") or get_settings().word_lang
    return {"audio_hash": await _narrate(text, lang)}


@app.get("/api/audio/{audio_hash}.mp3")
async def api_audio(audio_hash: str):
    s = get_settings()
    audio_path = s.audio_cache_full_path / f"{audio_hash}.mp3"
    if not audio_path.exists():
        raise HTTPException(404, "Audio not found")
    return FileResponse(audio_path, media_type="audio/mpeg")


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    global _vocabulary
    body = await request.json()
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    updates = {k: v for k, v in body.items() if k in known}

    # Load a new vocabulary before touching settings so a bad path is never saved
    new_vocabulary = None
    if "vocab_file" in updates:
        candidate = replace(s, vocab_file=updates["vocab_file"])
        try:
            new_vocabulary = load_vocabulary(candidate.vocab_full_path)
        except (OSError, TypeError, ValueError) as e:
            _log.warning("Vocabulary switch refused: %s", e)
            raise HTTPException(400, f"Cannot load vocabulary file: {e}")

    for k, v in updates.items():
        setattr(s, k, v)
    save_settings(s)
    if new_vocabulary is not None:
        _vocabulary = new_vocabulary
    return s.to_dict()
