from pathlib import Path

import pytest

from wordscramble.dictionary import WordListDictionary
from wordscramble.highscore import MemoryHighScoreStore

# Real words derivable from "drinking" (the root itself excluded)
DRINKING_WORDS = {
    "din", "dig", "gin", "ink", "kin", "rig",
    "ding", "grin", "king", "kind", "rind", "ring", "rink",
    "drink", "grind",
    "dining", "inking", "irking",
}

SANDWICH_WORDS = {"sand", "swan", "wish", "hands"}

# plus a few words that cannot be made from either root
DICTIONARY = DRINKING_WORDS | SANDWICH_WORDS | {"drinking", "sandwich", "house", "cat", "queen"}


class CountingHighScoreStore(MemoryHighScoreStore):
    def __init__(self, value: int = 0):
        super().__init__(value)
        self.writes = []

    def set(self, value: int) -> None:
        self.writes.append(value)
        super().set(value)


@pytest.fixture
def oracle():
    return WordListDictionary.from_words(DICTIONARY)


@pytest.fixture
def high_scores():
    return CountingHighScoreStore()


@pytest.fixture
def dictionary_file(tmp_path: Path) -> Path:
    p = tmp_path / "dictionary_en.txt"
    p.write_text("\n".join(sorted(DICTIONARY)) + "\n", encoding="utf-8")
    return p


@pytest.fixture
def start_file(tmp_path: Path) -> Path:
    p = tmp_path / "start.txt"
    p.write_text("drinking\nsandwich\n", encoding="utf-8")
    return p
