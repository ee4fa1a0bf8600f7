"""CLI entry point for vocab-quiz.

Usage:
  python -m vocab_quiz serve [--port PORT] [--host HOST]
  python -m vocab_quiz stop
  python -m vocab_quiz status
  python -m vocab_quiz groups
  python -m vocab_quiz play GROUP
"""
from __future__ import annotations

import os
import signal
import sys
from pathlib import Path

PID_FILE = Path(__file__).resolve().parent.parent / ".server.pid"


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "stop":
        _stop()
    elif command == "status":
        _status()
    elif command == "groups":
        _groups()
    elif command == "play":
        _play(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, stop, status, groups, play")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _server_pid() -> int | None:
    """PID of the running quiz server, or None.  Clears a stale PID file."""
    try:
        pid = int(PID_FILE.read_text().strip())
        os.kill(pid, 0)
    except FileNotFoundError:
        return None
    except (ValueError, ProcessLookupError, PermissionError):
        PID_FILE.unlink(missing_ok=True)
        return None
    return pid


def _stop() -> bool:
    pid = _server_pid()
    if pid is not None:
        os.kill(pid, signal.SIGTERM)
        PID_FILE.unlink(missing_ok=True)
    print(f"Stopped quiz server (PID {pid})." if pid else "Quiz server is not running.")
    return pid is not None


def _status():
    pid = _server_pid()
    print(f"Quiz server is running (PID {pid})." if pid else "Quiz server is not running.")


def _serve(args: list[str]):
    import uvicorn

    from vocab_quiz.config import load_settings

    pid = _server_pid()
    if pid is not None:
        print(f"Quiz server already running (PID {pid}). Use 'stop' first.")
        sys.exit(1)

    settings = load_settings()
    if not settings.vocab_full_path.exists():
        print(f"Vocabulary file not found: {settings.vocab_full_path}")
        sys.exit(1)

    port = int(_parse_flag(args, "--port", "8765"))
    host = _parse_flag(args, "--host", "127.0.0.1")
    print(f"Serving quiz for {settings.vocab_file} on http://{host}:{port} (Ctrl+C to stop)")

    PID_FILE.write_text(str(os.getpid()))
    try:
        uvicorn.run("vocab_quiz.app:app", host=host, port=port, timeout_graceful_shutdown=5)
    finally:
        PID_FILE.unlink(missing_ok=True)


def _groups():
    from vocab_quiz.config import load_settings
    from vocab_quiz.parsers.vocabulary_parser import load_vocabulary

    settings = load_settings()
    vocabulary = load_vocabulary(settings.vocab_full_path)
    for group, entries in vocabulary.items():
        print(f"  {group:12s} {len(entries)} words")


def _play(args: list[str]):
    import time

    from vocab_quiz.config import load_settings
    from vocab_quiz.parsers.vocabulary_parser import load_vocabulary
    from vocab_quiz.question_generator import GroupNotFoundError
    from vocab_quiz.quiz import QuizSession

    if not args:
        print("Usage: python -m vocab_quiz play GROUP")
        sys.exit(1)

    settings = load_settings()
    vocabulary = load_vocabulary(settings.vocab_full_path)
    try:
        session = QuizSession.start(vocabulary, args[0])
    except GroupNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)

    while not session.finished:
        question = session.current_question
        print(f"\n[{session.group}] {session.current_index + 1} / {session.total}")
        print(f"  {question.word}")
        for i, option in enumerate(question.options, 1):
            print(f"    {i}) {option}")

        choice = _read_choice(len(question.options))
        answer = session.answer(question.options[choice])
        if answer.correct:
            print("  Correct!")
        else:
            print(f"  Wrong. Answer: {answer.correct_meaning}")
        time.sleep(settings.advance_delay_ms / 1000)

    result = session.result()
    print()
    print("=" * 40)
    print(f"Score: {result.score} / {result.total} ({result.percentage}%)")
    print(result.message)


def _read_choice(n: int) -> int:
    while True:
        try:
            raw = input(f"  Your answer [1-{n}]: ").strip()
        except EOFError:
            print()
            sys.exit(1)
        if raw.isdigit() and 1 <= int(raw) <= n:
            return int(raw) - 1
        print(f"  Please enter a number from 1 to {n}.")


if __name__ == "__main__":
    main()
