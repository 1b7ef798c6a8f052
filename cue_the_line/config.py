"""Runtime settings, read from the environment (and .env, if present)."""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

from cue_the_line.days import DEFAULT_ANCHOR, parse_anchor
from cue_the_line.share import DEFAULT_PLAY_URL

ROOT = Path(__file__).parent.parent
DEFAULT_DATA_DIR = ROOT / "data"
DEFAULT_QUOTES_PATH = ROOT / "presets" / "quotes.json"


class Settings(BaseModel):
    data_dir: Path = DEFAULT_DATA_DIR
    quotes_path: Path = DEFAULT_QUOTES_PATH
    anchor_date: date = DEFAULT_ANCHOR
    play_url: str = DEFAULT_PLAY_URL
    host: str = "0.0.0.0"
    port: int = 13013


def load_settings(env_file: Path | None = ROOT / ".env") -> Settings:
    if env_file is not None:
        load_dotenv(env_file)
    defaults = Settings()
    return Settings(
        data_dir=Path(os.getenv("DATA_DIR", str(defaults.data_dir))),
        quotes_path=Path(os.getenv("QUOTES_PATH", str(defaults.quotes_path))),
        anchor_date=parse_anchor(os.getenv("ANCHOR_DATE", defaults.anchor_date.isoformat())),
        play_url=os.getenv("PLAY_URL", defaults.play_url),
        host=os.getenv("HOST", defaults.host),
        port=int(os.getenv("PORT", str(defaults.port))),
    )
