from __future__ import annotations

class WordScrambleError(Exception):
    """Base class for errors raised by the game core."""

    title = 'Error'

class WordListError(WordScrambleError):
    """The root word list is missing, unreadable or empty. Not recoverable."""

    title = 'Fatal Error'

class RoundNotActiveError(WordScrambleError):
    """An operation was called in a round state that does not allow it."""

    title = 'Round not active'

class DictionaryError(WordScrambleError):
    """The dictionary oracle's word data cannot be loaded. Not recoverable."""

    title = 'Fatal Error'
