from __future__ import annotations
import logging
import random
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import WordListError
from .game_logic import is_root_word

DEFAULT_WORDLIST = Path(__file__).parent / 'data' / 'start.txt'

def load_root_words(path: Path | str = DEFAULT_WORDLIST) -> List[str]:
    """
    Read the newline-delimited root word list.

    Entries are lowercased and blank lines skipped; entries that are not
    8 letters are dropped with a warning. A missing, unreadable or empty list
    raises WordListError: the game cannot pick a root word without it.
    """
    p = Path(path)
    if not p.exists():
        raise WordListError(f"Could not find {p.name} at {p}.")
    try:
        text = p.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise WordListError(f"Could not load {p.name}: {e}") from e

    entries = [ln.strip().lower() for ln in text.splitlines() if ln.strip()]
    words = [w for w in entries if is_root_word(w)]
    if len(words) != len(entries):
        logging.warning(f"{p.name}: skipped {len(entries) - len(words)} entries that are not 8-letter words")
    if not words:
        raise WordListError(f"List of words from {p.name} appears to be empty.")

    logging.info(f"Loaded {len(words)} root words from {p}")
    return words

def choose_root_word(words: Sequence[str], rng: Optional[random.Random] = None) -> str:
    if not words:
        raise WordListError("List of root words appears to be empty.")
    return (rng or random).choice(words)
