"""
Game session core: one player's rounds.

A round runs not_started -> in_progress -> over. Starting a round picks or
accepts an 8-letter root word and launches a PossibleWordSearch on a worker
thread; guesses are checked on the caller's thread against the same shared
oracle. When the clock runs out the search is stopped, whatever it found is
frozen as the round's possible words, and the high score is updated once.
"""

from __future__ import annotations
import logging
import random
from typing import FrozenSet, List, Optional, Sequence

from .dictionary import DEFAULT_LOCALE, WordOracle
from .errors import RoundNotActiveError
from .game_logic import (
    RESET_COMMAND,
    group_answers,
    is_root_word,
    normalize,
    validate_guess,
    word_score,
)
from .highscore import HighScoreStore, MemoryHighScoreStore
from .managers.search import PossibleWordSearch
from .schemas import GuessResult, RoundState, RoundStatus, RoundSummary, TimerState, UsedWord
from .wordlist import choose_root_word

DEFAULT_ROUND_SECONDS = 90

class GameSession:
    def __init__(
            self,
            oracle: WordOracle,
            *,
            high_scores: Optional[HighScoreStore] = None,
            root_words: Sequence[str] = (),
            locale: str = DEFAULT_LOCALE,
            round_seconds: int = DEFAULT_ROUND_SECONDS,
    ):
        self.oracle = oracle
        self.high_scores = high_scores or MemoryHighScoreStore()
        self.root_words = root_words
        self.locale = locale
        self.round_seconds = round_seconds

        self.status: RoundStatus = 'not_started'
        self.root_word: Optional[str] = None
        self.used_words: List[UsedWord] = []
        self.score: int = 0
        self.time_remaining: int = round_seconds
        self.search: Optional[PossibleWordSearch] = None
        self._possible: Optional[FrozenSet[str]] = None

    # -- round lifecycle ---------------------------------------------------

    def start_round(self, root_word: str) -> RoundState:
        root_word = normalize(root_word)
        if not is_root_word(root_word):
            raise ValueError(f"root word must be 8 letters, got {root_word!r}")

        # a search from an earlier round must never feed this one
        if self.search is not None:
            self.search.cancel()

        self.root_word = root_word
        self.used_words = []
        self.score = 0
        self.time_remaining = self.round_seconds
        self._possible = None
        self.search = PossibleWordSearch(root_word, self.oracle, self.locale).start()
        self.status = 'in_progress'
        logging.info(f"Round started with root word '{root_word}' ({self.round_seconds}s)")
        return self.state()

    def new_round(self, rng: Optional[random.Random] = None) -> RoundState:
        return self.start_round(choose_root_word(self.root_words, rng))

    def tick(self) -> bool:
        """Advance the clock one second. Returns True when this tick ended the round."""
        if self.status != 'in_progress':
            return False
        if self.time_remaining > 0:
            self.time_remaining -= 1
        if self.time_remaining == 0:
            self._end()
            return True
        return False

    def finish(self) -> RoundSummary:
        """End the running round now, as if its time had run out."""
        if self.status != 'in_progress':
            raise RoundNotActiveError('There is no round in progress to finish.')
        self.time_remaining = 0
        self._end()
        return self.summary()

    def _end(self) -> None:
        self.status = 'over'
        self._possible = self.search.stop() if self.search else frozenset()
        high_score = self.high_scores.get()
        if self.score > high_score:
            self.high_scores.set(self.score)
            logging.info(f"New high score {self.score} (was {high_score})")
        logging.info(
            f"Round over for '{self.root_word}': score {self.score}, "
            f"{len(self.used_words)}/{len(self._possible)} words found"
        )

    def close(self) -> None:
        if self.search is not None:
            self.search.cancel()

    # -- guesses -------------------------------------------------------------

    def submit_guess(self, raw: str) -> GuessResult:
        if raw.strip() == RESET_COMMAND:
            self.reset_high_score()
            return GuessResult(word='', command=True)
        if self.status != 'in_progress':
            raise RoundNotActiveError('Guesses are only accepted while a round is in progress.')

        word = normalize(raw)
        error = validate_guess(word, self.root_word, self._used(), self.oracle, self.locale)
        if error is not None:
            logging.debug(f"Rejected '{word}': {error.reason}")
            return GuessResult(word=word, error=error)

        score = word_score(word)
        self.used_words.insert(0, UsedWord(word=word, score=score))
        self.score += score
        return GuessResult(word=word, accepted=True, score=score)

    def check(self, raw: str) -> bool:
        """Whether `raw` would be accepted right now. Never changes state."""
        if self.status != 'in_progress':
            return False
        word = normalize(raw)
        return validate_guess(word, self.root_word, self._used(), self.oracle, self.locale) is None

    def reset_high_score(self) -> None:
        self.high_scores.set(0)
        logging.info("High score reset")

    def _used(self) -> List[str]:
        return [u.word for u in self.used_words]

    # -- views for the display -------------------------------------------------

    @property
    def possible_words(self) -> Optional[FrozenSet[str]]:
        return self._possible

    def state(self) -> RoundState:
        return RoundState(
            status=self.status,
            rootWord=self.root_word,
            usedWords=list(self.used_words),
            score=self.score,
            timeRemaining=self.time_remaining,
            highScore=self.high_scores.get(),
        )

    def timer_state(self) -> TimerState:
        return TimerState(timeRemaining=self.time_remaining, isOver=self.status == 'over')

    def summary(self) -> RoundSummary:
        if self.status != 'over' or self._possible is None:
            raise RoundNotActiveError('All possible answers are shown once the round is over.')
        return RoundSummary(
            rootWord=self.root_word,
            score=self.score,
            highScore=self.high_scores.get(),
            complete=bool(self.search and self.search.complete),
            groups=group_answers(self._possible, self._used()),
        )
