from __future__ import annotations
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import socketio
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from .config import load_settings
from .dictionary import build_oracle
from .errors import DictionaryError, RoundNotActiveError, WordListError, WordScrambleError
from .game_logic import group_answers, is_root_word, normalize, word_score
from .highscore import build_high_score_store
from .managers.game import GameManager
from .managers.search import find_possible_words
from .schemas import GuessPayload
from .wordlist import load_root_words

# Socket.IO server (ASGI)
sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins='*')

games: Optional[GameManager] = None

@asynccontextmanager
async def lifespan(app):
    """Load the word list, dictionary and high score store before serving.
    A missing or empty word list stops the server from starting.
    """
    global games
    settings = load_settings()
    logging.basicConfig(level=settings.log_level.upper())
    try:
        root_words = load_root_words(settings.wordlist)
        oracle = build_oracle(settings)
    except (WordListError, DictionaryError) as e:
        logging.error(f"{e.title}: {e}")
        raise
    games = GameManager(
        sio,
        oracle,
        root_words,
        build_high_score_store(settings.highscore_path),
        locale=settings.locale,
        round_seconds=settings.round_seconds,
        tick_seconds=settings.tick_seconds,
    )
    app.state.settings = settings
    try:
        yield
    finally:
        games.shutdown()
        games = None
        logging.info("Stop Server")

app = FastAPI(title="Word Scramble Server", version="0.1.0", lifespan=lifespan)

# Mount Socket.IO ASGI application
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

# CORS for REST
app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

def _games() -> GameManager:
    if games is None:
        raise HTTPException(status_code=503, detail='Server is not ready')
    return games

# REST Endpoints
@app.get('/health')
async def health():
    manager = _games()
    return { 'ok': True, 'rootWords': len(manager.root_words), 'sessions': len(manager.sessions) }

# Dictionary validation REST endpoint
@app.get('/dict/validate')
async def validate_word(word: str, locale: Optional[str] = None):
    manager = _games()
    w = normalize(word)
    return { 'word': w, 'locale': locale or manager.locale, 'valid': manager.oracle.is_real(w, locale or manager.locale) }

@app.get('/score')
async def score_word(word: str):
    w = normalize(word)
    return { 'word': w, 'score': word_score(w) }

@app.get('/roots/{root}/answers')
async def root_answers(root: str, locale: Optional[str] = None):
    manager = _games()
    root = normalize(root)
    if not is_root_word(root):
        raise HTTPException(status_code=400, detail=f'Root word must be 8 letters: {root!r}')
    # tens of thousands of oracle calls; keep them off the event loop
    words = await asyncio.to_thread(find_possible_words, root, manager.oracle, locale or manager.locale)
    return {
        'rootWord': root,
        'count': len(words),
        'groups': [g.model_dump() for g in group_answers(words)],
    }

@app.get('/highscore')
async def get_high_score():
    return { 'highScore': _games().high_scores.get() }

@app.delete('/highscore')
async def reset_high_score():
    _games().high_scores.set(0)
    return { 'highScore': 0 }

# Socket.IO Events
@sio.event
async def connect(sid, environ, auth=None):
    await sio.emit('pong', to=sid)

@sio.event
async def disconnect(sid, reason=None):
    if games is not None:
        games.remove(sid)

@sio.on('ping')
async def on_ping(sid):
    await sio.emit('pong', to=sid)

async def _report(sid, error: Exception):
    # pydantic errors carry a model-name title of their own
    title = error.title if isinstance(error, WordScrambleError) else 'Invalid request'
    await sio.emit('round:error', { 'title': title, 'message': str(error) }, to=sid)

def _word_from(payload) -> str:
    if isinstance(payload, str):
        return payload
    return GuessPayload.model_validate(payload).word

@sio.on('round:start')
async def round_start(sid, payload=None):
    if games is None:
        return
    root_word = payload.get('rootWord') if isinstance(payload, dict) else None
    if root_word is not None and not isinstance(root_word, str):
        root_word = None
    try:
        await games.start_round(sid, root_word)
    except (ValueError, WordListError) as e:
        await _report(sid, e)

@sio.on('round:guess')
async def round_guess(sid, payload):
    if games is None:
        return
    try:
        await games.submit_guess(sid, _word_from(payload))
    except (RoundNotActiveError, ValidationError) as e:
        await _report(sid, e)

@sio.on('round:check')
async def round_check(sid, payload):
    if games is None:
        return
    try:
        await games.check(sid, _word_from(payload))
    except ValidationError as e:
        await _report(sid, e)

@sio.on('round:finish')
async def round_finish(sid):
    if games is None:
        return
    try:
        await games.finish_round(sid)
    except RoundNotActiveError as e:
        await _report(sid, e)

@sio.on('round:state')
async def round_state(sid):
    if games is None:
        return
    await games.send_state(sid)

@sio.on('round:summary')
async def round_summary(sid):
    if games is None:
        return
    try:
        await games.send_summary(sid)
    except RoundNotActiveError as e:
        await _report(sid, e)

# Export ASGI app for uvicorn
application = asgi_app

# For local running: uvicorn wordscramble.main:application --reload --host 0.0.0.0 --port 8000
