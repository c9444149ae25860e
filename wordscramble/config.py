from __future__ import annotations
import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from .dictionary import DEFAULT_LOCALE
from .wordlist import DEFAULT_WORDLIST

load_dotenv()

ENV_PREFIX = 'WORDSCRAMBLE_'

class Settings(BaseModel):
    wordlist: Path = DEFAULT_WORDLIST
    dictionary: Literal['nltk', 'wordlist'] = 'nltk'
    dictionary_path: Optional[Path] = None
    serialize_dictionary: bool = False
    locale: str = DEFAULT_LOCALE
    # 0 turns the wordfreq frequency filter off
    min_zipf: float = 0.0
    round_seconds: int = 90
    tick_seconds: float = 1.0
    highscore_path: Optional[Path] = None
    log_level: str = 'INFO'

def load_settings() -> Settings:
    """Build Settings from WORDSCRAMBLE_* environment variables (and .env)."""
    values = {}
    for name in Settings.model_fields:
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    return Settings(**values)

if __name__ == "__main__":
    print(load_settings().model_dump_json(indent=2))
