import asyncio

import pytest

from wordscramble import main
from wordscramble.errors import WordListError
from wordscramble.highscore import MemoryHighScoreStore
from wordscramble.managers.game import GameManager


class Recorder:
    def __init__(self):
        self.emitted = []

    async def emit(self, event, data=None, to=None, room=None):
        self.emitted.append((event, data, to))

    def events(self):
        return [e for e, _, _ in self.emitted]

    def last(self, event):
        return next(d for e, d, _ in reversed(self.emitted) if e == event)


@pytest.fixture
def recorder(monkeypatch):
    rec = Recorder()
    monkeypatch.setattr(main.sio, "emit", rec.emit)
    return rec


def _install(monkeypatch, recorder, oracle, root_words=("drinking",)):
    games = GameManager(recorder, oracle, list(root_words), MemoryHighScoreStore(), tick_seconds=10)
    monkeypatch.setattr(main, "games", games)
    return games


def _run(games, *calls):
    async def scenario():
        try:
            for call in calls:
                await call
        finally:
            games.shutdown()
    asyncio.run(scenario())


@pytest.fixture
def games(monkeypatch, recorder, oracle):
    return _install(monkeypatch, recorder, oracle)


def test_word_from_accepts_string_or_object():
    assert main._word_from("drink") == "drink"
    assert main._word_from({"word": "ring"}) == "ring"


def test_guess_before_any_round(games, recorder):
    _run(games, main.round_guess("p1", "drink"))
    assert recorder.events() == ["round:error"]
    error = recorder.last("round:error")
    assert error["title"] == "Round not active"
    assert error["message"]


def test_guess_payload_forms(games, recorder):
    _run(
        games,
        main.round_start("p1", {"rootWord": "drinking"}),
        main.round_guess("p1", "drink"),
        main.round_guess("p1", {"word": "ring"}),
    )
    assert "round:error" not in recorder.events()
    guesses = [d for e, d, _ in recorder.emitted if e == "round:guess"]
    assert [(g["word"], g["accepted"]) for g in guesses] == [("drink", True), ("ring", True)]
    assert recorder.last("round:state")["score"] == 10


def test_malformed_guess_payload(games, recorder):
    _run(
        games,
        main.round_start("p1", {"rootWord": "drinking"}),
        main.round_guess("p1", {"nope": 1}),
    )
    error = recorder.last("round:error")
    assert error["title"] == "Invalid request"
    assert games.get("p1").used_words == []


def test_start_ignores_non_string_root(games, recorder):
    _run(games, main.round_start("p1", {"rootWord": 123}))
    assert recorder.events() == ["round:state"]
    assert recorder.last("round:state")["rootWord"] == "drinking"


def test_start_with_bad_root_word(games, recorder):
    _run(games, main.round_start("p1", {"rootWord": "drink"}))
    assert recorder.events() == ["round:error"]
    assert recorder.last("round:error")["title"] == "Invalid request"
    assert games.get("p1").status == "not_started"


def test_start_with_empty_word_list(monkeypatch, recorder, oracle):
    games = _install(monkeypatch, recorder, oracle, root_words=())
    _run(games, main.round_start("p1"))
    error = recorder.last("round:error")
    assert error["title"] == WordListError.title == "Fatal Error"


def test_summary_only_after_round_over(games, recorder):
    _run(
        games,
        main.round_summary("p1"),
        main.round_start("p1", {"rootWord": "drinking"}),
        main.round_summary("p1"),
        main.round_finish("p1"),
        main.round_summary("p1"),
    )
    events = recorder.events()
    assert events[:3] == ["round:error", "round:state", "round:error"]
    assert events[-2:] == ["round:over", "round:summary"]
    summary = recorder.last("round:summary")
    assert summary["rootWord"] == "drinking"


def test_finish_without_round(games, recorder):
    _run(games, main.round_finish("p1"))
    assert recorder.last("round:error")["title"] == "Round not active"


def test_handlers_do_nothing_before_startup(monkeypatch, recorder):
    monkeypatch.setattr(main, "games", None)

    async def scenario():
        await main.round_start("p1")
        await main.round_guess("p1", "drink")
        await main.round_check("p1", "drink")
        await main.round_finish("p1")
        await main.round_state("p1")
        await main.round_summary("p1")

    asyncio.run(scenario())
    assert recorder.emitted == []
