import pytest

from wordscramble.dictionary import WordListDictionary
from wordscramble.game_logic import (
    group_answers,
    is_long_enough,
    is_original,
    is_possible,
    is_root_word,
    normalize,
    validate_guess,
    word_score,
)


@pytest.mark.parametrize("length,expected", [
    (0, 0), (1, 0), (2, 0),
    (3, 3), (4, 4), (5, 6), (6, 8), (7, 13), (8, 18),
    (9, 0),
])
def test_word_score_table(length, expected):
    assert word_score("x" * length) == expected


def test_is_possible_multiset():
    assert is_possible("aab", "aabbcc") is True
    assert is_possible("aaa", "aabbcc") is False
    assert is_possible("drink", "drinking") is True
    assert is_possible("dringk", "drinking") is True
    assert is_possible("drinks", "drinking") is False
    # letters, not substrings
    assert is_possible("kind", "drinking") is True


def test_normalize_and_simple_rules():
    assert normalize("  DrInK \n") == "drink"
    assert is_long_enough("ink") and not is_long_enough("in")
    assert is_original("ring", ["drink"], "drinking")
    assert not is_original("drink", ["drink"], "drinking")
    assert not is_original("drinking", [], "drinking")


def test_is_root_word():
    assert is_root_word("drinking")
    assert not is_root_word("drink")
    assert not is_root_word("drink1ng")
    assert not is_root_word("drinkingg")


@pytest.fixture
def small_oracle():
    return WordListDictionary.from_words(["drink", "ring", "in"])


@pytest.mark.parametrize("word,used,reason", [
    ("drink", ["drink"], "not_original"),
    ("drinking", [], "not_original"),
    ("queen", [], "not_possible"),
    ("in", [], "too_short"),
    ("dringk", [], "not_real"),
])
def test_validate_guess_reasons(small_oracle, word, used, reason):
    err = validate_guess(word, "drinking", used, small_oracle, "en")
    assert err is not None
    assert err.reason == reason


def test_validate_guess_checks_in_order(small_oracle):
    # repeated AND unmakeable AND too short: the first rule wins
    err = validate_guess("zz", "drinking", ["zz"], small_oracle, "en")
    assert err.reason == "not_original"
    # unmakeable AND too short
    err = validate_guess("zz", "drinking", [], small_oracle, "en")
    assert err.reason == "not_possible"


def test_rejection_messages_echo_word_and_root(small_oracle):
    err = validate_guess("drink", "drinking", ["drink"], small_oracle, "en")
    assert err.title == "Repeated word"
    assert err.message == "drink was used already."
    err = validate_guess("queen", "drinking", [], small_oracle, "en")
    assert err.title == "Unmakeable"
    assert '"drinking"' in err.message
    err = validate_guess("dringk", "drinking", [], small_oracle, "en")
    assert err.title == "Invalid word"
    assert err.message.startswith("dringk ")


def test_validate_guess_accepts(small_oracle):
    assert validate_guess("ring", "drinking", ["drink"], small_oracle, "en") is None


def test_group_answers():
    groups = group_answers(["ring", "drink", "ink", "grin", "kin"], guessed=["ring"])
    assert [g.length for g in groups] == [3, 4, 5, 6, 7, 8]
    assert [g.score for g in groups] == [3, 4, 6, 8, 13, 18]
    fours = groups[1]
    assert [e.word for e in fours.words] == ["grin", "ring"]
    assert [e.guessed for e in fours.words] == [False, True]
    assert groups[5].words == []
