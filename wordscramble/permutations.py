"""
Candidate enumeration for a root word.

A candidate is any arrangement of 3..8 letters drawn from the root word's
letter multiset: a letter may appear at most as often as it does in the root.
Arrangements are produced by walking the multiset of remaining letter counts,
so each distinct string comes out exactly once even when the root repeats
letters ("drinking" has two i's and two n's).

For a root of 8 distinct letters there are 109,536 arrangements before the
root itself is removed, which is why callers consume this lazily and may stop
early.
"""

from __future__ import annotations

from collections import Counter
from fractions import Fraction
from math import factorial
from typing import Dict, Iterator, List

from .game_logic import MIN_WORD_LENGTH, ROOT_LENGTH

def iter_candidates(
        root: str,
        min_length: int = MIN_WORD_LENGTH,
        max_length: int = ROOT_LENGTH,
) -> Iterator[str]:
    """
    Yield every distinct candidate of `root`, shortest first, then in
    lexicographic order within a length. The root itself is never yielded.
    """
    root = root.lower()
    letters = sorted(set(root))
    for length in range(min_length, min(max_length, len(root)) + 1):
        for word in _arrangements(letters, Counter(root), length):
            if word != root:
                yield word

def _arrangements(letters: List[str], counts: Dict[str, int], length: int) -> Iterator[str]:
    path: List[str] = []

    def walk() -> Iterator[str]:
        if len(path) == length:
            yield ''.join(path)
            return
        for ch in letters:
            if counts[ch] == 0:
                continue
            counts[ch] -= 1
            path.append(ch)
            yield from walk()
            path.pop()
            counts[ch] += 1

    return walk()

def count_candidates(
        root: str,
        min_length: int = MIN_WORD_LENGTH,
        max_length: int = ROOT_LENGTH,
) -> int:
    """
    Number of strings iter_candidates() would yield, without generating them.

    Uses the exponential generating function of the letter multiset: the
    number of distinct arrangements of length L is L! times the x^L
    coefficient of prod over letters of (1 + x + x^2/2! + ... + x^n/n!).
    """
    root = root.lower()
    poly = [Fraction(1)]
    for n in Counter(root).values():
        term = [Fraction(1, factorial(k)) for k in range(n + 1)]
        product = [Fraction(0)] * (len(poly) + len(term) - 1)
        for i, a in enumerate(poly):
            for j, b in enumerate(term):
                product[i + j] += a * b
        poly = product

    total = 0
    for length in range(min_length, min(max_length, len(root)) + 1):
        total += int(poly[length] * factorial(length))
    if min_length <= len(root) <= max_length:
        total -= 1  # the root itself
    return total
