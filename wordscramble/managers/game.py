from __future__ import annotations
import logging
from typing import Dict, Optional, Sequence

from ..dictionary import DEFAULT_LOCALE, WordOracle
from ..highscore import HighScoreStore
from ..schemas import GuessResult, RoundState, RoundSummary
from ..session import DEFAULT_ROUND_SECONDS, GameSession
from .timer import TimerManager

class GameManager:
    """
    Owns one GameSession per connected player and the shared pieces every
    session uses: the dictionary oracle, the root word list and the high
    score store.
    """

    def __init__(
            self,
            sio,
            oracle: WordOracle,
            root_words: Sequence[str],
            high_scores: HighScoreStore,
            *,
            locale: str = DEFAULT_LOCALE,
            round_seconds: int = DEFAULT_ROUND_SECONDS,
            tick_seconds: float = 1.0,
    ):
        self.sio = sio
        self.oracle = oracle
        self.root_words = root_words
        self.high_scores = high_scores
        self.locale = locale
        self.round_seconds = round_seconds
        self.timer = TimerManager(sio, tick_seconds)
        self.sessions: Dict[str, GameSession] = {}

    def get(self, sid: str) -> Optional[GameSession]:
        return self.sessions.get(sid)

    def get_or_create(self, sid: str) -> GameSession:
        if sid not in self.sessions:
            self.sessions[sid] = GameSession(
                self.oracle,
                high_scores=self.high_scores,
                root_words=self.root_words,
                locale=self.locale,
                round_seconds=self.round_seconds,
            )
        return self.sessions[sid]

    async def start_round(self, sid: str, root_word: Optional[str] = None) -> RoundState:
        session = self.get_or_create(sid)
        state = session.start_round(root_word) if root_word else session.new_round()
        self.timer.start(sid, session)
        await self.sio.emit('round:state', state.model_dump(), to=sid)
        return state

    async def submit_guess(self, sid: str, raw: str) -> GuessResult:
        session = self.get_or_create(sid)
        result = session.submit_guess(raw)
        await self.sio.emit('round:guess', result.model_dump(), to=sid)
        if result.accepted or result.command:
            await self.sio.emit('round:state', session.state().model_dump(), to=sid)
        return result

    async def check(self, sid: str, raw: str) -> bool:
        session = self.get_or_create(sid)
        valid = session.check(raw)
        await self.sio.emit('round:check', {'word': raw, 'valid': valid}, to=sid)
        return valid

    async def finish_round(self, sid: str) -> RoundSummary:
        session = self.get_or_create(sid)
        self.timer.stop(sid)
        summary = session.finish()
        await self.sio.emit('round:over', summary.model_dump(), to=sid)
        return summary

    async def send_state(self, sid: str) -> RoundState:
        state = self.get_or_create(sid).state()
        await self.sio.emit('round:state', state.model_dump(), to=sid)
        return state

    async def send_summary(self, sid: str) -> RoundSummary:
        summary = self.get_or_create(sid).summary()
        await self.sio.emit('round:summary', summary.model_dump(), to=sid)
        return summary

    def remove(self, sid: str):
        self.timer.stop(sid)
        session = self.sessions.pop(sid, None)
        if session is not None:
            session.close()
            logging.info(f"Closed session {sid}")

    def shutdown(self):
        for sid in list(self.sessions):
            self.remove(sid)
