from __future__ import annotations
import logging
import threading
import time
from typing import FrozenSet, Optional, Set

from ..dictionary import DEFAULT_LOCALE, WordOracle
from ..permutations import count_candidates, iter_candidates

class PossibleWordSearch:
    """
    Background pass that checks every candidate of one root word against the
    dictionary oracle.

    The search owns its result set. It is published exactly once, either when
    every candidate has been checked or when stop() is called first; after
    that `result` never changes. A search is bound to a single root word, so a
    caller that drops a stale search can never see its words attributed to a
    later round.
    """

    def __init__(self, root_word: str, oracle: WordOracle, locale: str = DEFAULT_LOCALE):
        self.root_word = root_word
        self.locale = locale
        self.total = count_candidates(root_word)
        self.checked = 0
        self.complete = False
        self.error: Optional[BaseException] = None
        self._oracle = oracle
        self._found: Set[str] = set()
        self._result: Optional[FrozenSet[str]] = None
        self._lock = threading.Lock()
        self._cancelled = threading.Event()
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> 'PossibleWordSearch':
        if self._thread is not None:
            raise RuntimeError(f"search for {self.root_word!r} already started")
        self._thread = threading.Thread(target=self.run, name=f"search-{self.root_word}", daemon=True)
        self._thread.start()
        return self

    def run(self) -> FrozenSet[str]:
        t0 = time.time()
        try:
            for candidate in iter_candidates(self.root_word):
                if self._cancelled.is_set():
                    break
                self.checked += 1
                if self._oracle.is_real(candidate, self.locale):
                    with self._lock:
                        if self._result is not None:
                            break
                        self._found.add(candidate)
        except Exception as e:
            self.error = e
            logging.exception(f"Search for '{self.root_word}' failed after {self.checked} candidates")
        result = self._publish(complete=self.error is None and not self._cancelled.is_set())
        logging.info(
            f"Search for '{self.root_word}': {len(result)} words from {self.checked}/{self.total} candidates "
            f"in {(time.time() - t0) * 1000.0:.0f} ms"
        )
        return result

    def _publish(self, complete: bool) -> FrozenSet[str]:
        with self._lock:
            if self._result is None:
                self.complete = complete
                self._result = frozenset(self._found)
                self._done.set()
            return self._result

    def stop(self) -> FrozenSet[str]:
        """Cancel the pass and publish whatever has been found so far."""
        self._cancelled.set()
        return self._publish(complete=False)

    def cancel(self) -> None:
        """Cancel the pass; its result is about to be discarded."""
        self._cancelled.set()

    def wait(self, timeout: Optional[float] = None) -> Optional[FrozenSet[str]]:
        self._done.wait(timeout)
        return self._result

    @property
    def done(self) -> bool:
        return self._done.is_set()

    @property
    def result(self) -> Optional[FrozenSet[str]]:
        return self._result

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 1.0
        return min(1.0, self.checked / self.total)

def find_possible_words(root_word: str, oracle: WordOracle, locale: str = DEFAULT_LOCALE) -> FrozenSet[str]:
    """Run a search to completion on the calling thread."""
    return PossibleWordSearch(root_word, oracle, locale).run()
