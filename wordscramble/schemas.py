from __future__ import annotations
from pydantic import BaseModel
from typing import List, Literal, Optional

RoundStatus = Literal['not_started', 'in_progress', 'over']

RejectionReason = Literal['not_original', 'not_possible', 'too_short', 'not_real']

class UsedWord(BaseModel):
    word: str
    score: int

class GuessError(BaseModel):
    reason: RejectionReason
    title: str
    message: str

class GuessResult(BaseModel):
    word: str
    accepted: bool = False
    score: int = 0
    error: Optional[GuessError] = None
    # True for the high score reset command
    command: bool = False

class GuessPayload(BaseModel):
    word: str

class WordEntry(BaseModel):
    word: str
    guessed: bool = False

class WordGroup(BaseModel):
    length: int
    score: int
    words: List[WordEntry] = []

class RoundSummary(BaseModel):
    rootWord: str
    score: int
    highScore: int
    # False when the round ended before every candidate was checked
    complete: bool = True
    groups: List[WordGroup] = []

class RoundState(BaseModel):
    status: RoundStatus = 'not_started'
    rootWord: Optional[str] = None
    usedWords: List[UsedWord] = []
    score: int = 0
    timeRemaining: int = 0
    highScore: int = 0

class TimerState(BaseModel):
    # seconds left in the round
    timeRemaining: int
    isOver: bool = False
