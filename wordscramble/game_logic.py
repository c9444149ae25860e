from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from .dictionary import WordOracle
from .schemas import GuessError, RejectionReason, WordEntry, WordGroup

ROOT_LENGTH = 8
MIN_WORD_LENGTH = 3
RESET_COMMAND = 'XXX'

# length -> points; anything outside 3..8 scores nothing
SCORE_TABLE: Dict[int, int] = {3: 3, 4: 4, 5: 6, 6: 8, 7: 13, 8: 18}

MESSAGES: Dict[RejectionReason, tuple] = {
    'not_original': ('Repeated word', '{word} was used already.'),
    'not_possible': ('Unmakeable', 'Word cannot be made from "{root}".'),
    'too_short': ('Word too short', 'Word must be at least three letters long.'),
    'not_real': ('Invalid word', "{word} does not occur in Word Scramble's dictionary"),
}

def normalize(raw: str) -> str:
    return raw.strip().lower()

def word_score(word: str) -> int:
    return SCORE_TABLE.get(len(word), 0)

def is_root_word(word: str) -> bool:
    return len(word) == ROOT_LENGTH and word.isalpha() and word.isascii()

def is_original(word: str, used_words: Iterable[str], root_word: str) -> bool:
    return word != root_word and word not in set(used_words)

def is_possible(word: str, root_word: str) -> bool:
    # consume one root letter per guess letter
    letters = list(root_word)
    for ch in word:
        try:
            letters.remove(ch)
        except ValueError:
            return False
    return True

def is_long_enough(word: str) -> bool:
    return len(word) >= MIN_WORD_LENGTH

def rejection(reason: RejectionReason, word: str, root_word: str) -> GuessError:
    title, message = MESSAGES[reason]
    return GuessError(reason=reason, title=title, message=message.format(word=word, root=root_word))

def validate_guess(
        word: str,
        root_word: str,
        used_words: Iterable[str],
        oracle: WordOracle,
        locale: str,
) -> Optional[GuessError]:
    """
    Run the four guess rules in their fixed order and return the first failure,
    or None when the (already normalized) word is acceptable.

    The oracle is consulted last because it is the only expensive rule.
    """
    if not is_original(word, used_words, root_word):
        return rejection('not_original', word, root_word)
    if not is_possible(word, root_word):
        return rejection('not_possible', word, root_word)
    if not is_long_enough(word):
        return rejection('too_short', word, root_word)
    if not oracle.is_real(word, locale):
        return rejection('not_real', word, root_word)
    return None

def group_answers(words: Iterable[str], guessed: Iterable[str] = ()) -> List[WordGroup]:
    """Bucket words by length 3..8, sorted, flagging the ones already guessed."""
    guessed_set = set(guessed)
    buckets: Dict[int, List[str]] = {n: [] for n in range(MIN_WORD_LENGTH, ROOT_LENGTH + 1)}
    for w in words:
        if len(w) in buckets:
            buckets[len(w)].append(w)
    return [
        WordGroup(
            length=n,
            score=SCORE_TABLE[n],
            words=[WordEntry(word=w, guessed=w in guessed_set) for w in sorted(ws)],
        )
        for n, ws in buckets.items()
    ]
