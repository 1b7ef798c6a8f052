"""Cue The Line — launcher. Serves the API, or plays today's run in the terminal."""

import argparse
import logging
import os
import sys
import time
from datetime import date
from pathlib import Path

import uvicorn

from cue_the_line.config import Settings, load_settings
from cue_the_line.pool import PoolLoadError, load_pool
from cue_the_line.session import NO_QUOTES_STATUS, DailySession
from cue_the_line.share import result_message
from cue_the_line.storage import JsonRunStore


def play(settings: Settings) -> int:
    try:
        pool = load_pool(settings.quotes_path)
    except PoolLoadError as e:
        print("Could not load quotes.json")
        print(f"  {e}")
        return 1

    session = DailySession(
        pool, JsonRunStore(settings.data_dir), date.today(),
        anchor=settings.anchor_date, play_url=settings.play_url,
    )
    print(f"QuoteRun #{session.run_number}")

    reveal = session.yesterday_reveal()
    if reveal:
        print("\nYesterday's answers:")
        for item in reveal:
            year = f" ({item.year})" if item.year else ""
            print(f"  {item.index}. “{item.quote}”\n     — {item.title}{year}")

    while (q := session.current_quote) is not None:
        print(f"\n[{session.index + 1} / 5] “{q.quote}”")
        for slot in (1, 2):
            if session.is_hint_shown(slot):
                print(f"  Hint {slot}: {q.hint1 if slot == 1 else q.hint2}")
        try:
            raw = input("Movie (or 'hint 1' / 'hint 2'): ")
        except EOFError:
            print()
            return 0
        command = raw.strip().lower()
        if command in ("hint 1", "hint 2"):
            slot = int(command[-1])
            print(f"  Hint {slot}: {session.reveal_hint(slot)}")
            print(f"  Hints used: {session.state.hints_used}")
            continue
        result = session.submit_answer(raw)
        if result.status:
            print(result.status)
        time.sleep(result.advance_delay_ms / 1000)

    if not session.completed:
        print(NO_QUOTES_STATUS)
        return 0

    print()
    print("\n".join(result_message(session.state)))
    closer = session.closer()
    if closer:
        print(f"\n“{closer.quote}” — {closer.source}")
    print()
    print(session.share_text())
    return 0


def main():
    parser = argparse.ArgumentParser(description="Cue The Line daily movie-quote game")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Run store directory (default: ./data)")
    parser.add_argument("--quotes", type=Path, default=None,
                        help="Quote pool JSON (default: ./presets/quotes.json)")
    parser.add_argument("--play", action="store_true",
                        help="Play today's run in the terminal instead of serving the API")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.WARNING if args.play else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    # Export overrides so the app factory picks them up too
    if args.data_dir:
        os.environ["DATA_DIR"] = str(args.data_dir.resolve())
    if args.quotes:
        os.environ["QUOTES_PATH"] = str(args.quotes.resolve())
    settings = load_settings()

    if args.play:
        sys.exit(play(settings))

    print(f"Starting API on http://localhost:{settings.port} ...")
    uvicorn.run("cue_the_line.app:create_app", factory=True,
                host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
