from __future__ import annotations
import logging
import threading
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Protocol

import nltk
from nltk.corpus import words as nltk_words
from wordfreq import zipf_frequency

from .errors import DictionaryError

DEFAULT_LOCALE = 'en'

# Dictionary oracles answer one question: is this string a real word in a locale.
# A single instance is shared by the guess path and the background search, so
# every implementation here is either immutable after construction or wrapped
# in SerializedOracle.

class WordOracle(Protocol):
    def is_real(self, word: str, locale: str = DEFAULT_LOCALE) -> bool:
        ...

class WordListDictionary:
    """Oracle backed by plain word lists, one per locale."""

    def __init__(self, locales: Optional[Dict[str, Iterable[str]]] = None):
        # Store lowercase words
        self._words: Dict[str, FrozenSet[str]] = {
            locale: frozenset(w.strip().lower() for w in words if w.strip())
            for locale, words in (locales or {}).items()
        }

    @classmethod
    def from_words(cls, words: Iterable[str], locale: str = DEFAULT_LOCALE) -> 'WordListDictionary':
        return cls({locale: words})

    @classmethod
    def from_file(cls, path: Path | str, locale: str = DEFAULT_LOCALE) -> 'WordListDictionary':
        p = Path(path)
        words = p.read_text(encoding='utf-8').splitlines()
        logging.info(f"Loaded {len(words)} dictionary lines for '{locale}' from {p}")
        return cls({locale: words})

    @classmethod
    def from_nltk(cls, locale: str = DEFAULT_LOCALE) -> 'WordListDictionary':
        words = load_nltk_words()
        logging.info(f"Loaded {len(words)} words for '{locale}' from the NLTK words corpus")
        return cls({locale: words})

    @property
    def locales(self) -> FrozenSet[str]:
        return frozenset(self._words)

    def __len__(self) -> int:
        return sum(len(ws) for ws in self._words.values())

    def is_real(self, word: str, locale: str = DEFAULT_LOCALE) -> bool:
        if not word:
            return False
        return word.lower() in self._words.get(locale, frozenset())

def load_nltk_words(download: bool = True) -> List[str]:
    """
    English words from the NLTK `words` corpus (Webster's 2nd edition list).

    Capitalized entries are proper nouns and are left out. The corpus is
    fetched once with nltk.download() when it is not installed yet.
    """
    try:
        entries = nltk_words.words('en')
    except LookupError:
        if not download:
            raise DictionaryError("The NLTK 'words' corpus is not installed.")
        nltk.download('words', quiet=True)
        try:
            entries = nltk_words.words('en')
        except LookupError as e:
            raise DictionaryError(f"The NLTK 'words' corpus could not be downloaded: {e}") from e
    return [w for w in entries if w.isalpha() and w.islower()]

class FrequencyFilter:
    """
    Narrows another oracle to words that are also in common use: the word's
    wordfreq Zipf frequency in the locale must reach `min_zipf`. Useful to keep
    archaic dictionary entries out of the round-end answer list.
    """

    def __init__(self, inner: WordOracle, min_zipf: float, locale: str = DEFAULT_LOCALE):
        self.inner = inner
        self.min_zipf = min_zipf
        # first lookup loads the frequency table for the locale
        zipf_frequency('word', locale)

    def is_real(self, word: str, locale: str = DEFAULT_LOCALE) -> bool:
        if not self.inner.is_real(word, locale):
            return False
        return zipf_frequency(word.lower(), locale) >= self.min_zipf

class SerializedOracle:
    """Wraps an oracle that is not safe to call from several threads at once."""

    def __init__(self, inner: WordOracle):
        self.inner = inner
        self._lock = threading.Lock()

    def is_real(self, word: str, locale: str = DEFAULT_LOCALE) -> bool:
        with self._lock:
            return self.inner.is_real(word, locale)

def build_oracle(settings) -> WordOracle:
    """Construct the process-wide oracle selected by configuration."""
    if settings.dictionary == 'wordlist':
        if settings.dictionary_path is None:
            raise ValueError("WORDSCRAMBLE_DICTIONARY_PATH is required for the 'wordlist' dictionary")
        oracle: WordOracle = WordListDictionary.from_file(settings.dictionary_path, settings.locale)
    else:
        oracle = WordListDictionary.from_nltk(settings.locale)
    if settings.min_zipf > 0:
        oracle = FrequencyFilter(oracle, settings.min_zipf, settings.locale)
    if settings.serialize_dictionary:
        oracle = SerializedOracle(oracle)
    logging.info(f"Dictionary oracle: {type(oracle).__name__} ({settings.dictionary}, locale={settings.locale})")
    return oracle
