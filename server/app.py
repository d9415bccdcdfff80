"""FastAPI server for lingodrill."""

import logging
import os

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from core.config import LANGUAGES, PHRASE, WORD
from core.engine import DRILLS, PracticeEngine
from core.errors import DuplicateIdentity, InsufficientVocabulary, PersistenceUnavailable, UnknownRound
from core.interfaces import Storage
from core.models import Entry
from core.vocabulary import VocabularyView, add_entry

from server.asyncio_scheduler import AsyncioScheduler
from server.file_storage import FileStorage


# Pydantic models for API
class EntryModel(BaseModel):
    English: str
    Konkani: str = ""
    Telugu: str = ""
    Type: str = WORD


class SettingsRequest(BaseModel):
    learningLanguage: str


class StartRoundRequest(BaseModel):
    kind: str
    ledger_snapshot: Optional[dict[str, int]] = None


class AnswerRequest(BaseModel):
    choice: Optional[str] = None     # Bubble id (capture) or option text (quiz)
    tile_id: Optional[str] = None    # Lane-match drop
    target: Optional[str] = None


class TickRequest(BaseModel):
    elapsed: float


class HoldRequest(BaseModel):
    tile_id: str


class OutcomeResponse(BaseModel):
    accepted: bool
    correct: bool
    ledger_delta: dict[str, int]
    score_delta: int
    round: dict


class StatusResponse(BaseModel):
    language: str
    languages: list[str]
    entry_count: int
    word_count: int
    phrase_count: int
    high_score: int
    mistake_count: int
    active_rounds: list[str]


# Global state (in production, use proper DI)
storage: Storage = None
engine: PracticeEngine = None


app = FastAPI(title="Lingodrill API", description="Adaptive vocabulary practice API")


def create_storage() -> Storage:
    """Pick the storage backend from LINGODRILL_STORAGE (file or postgres)."""
    storage_type = os.environ.get('LINGODRILL_STORAGE', 'file')
    if storage_type == 'postgres':
        from server.postgres_storage import PostgresStorage
        logger.info("Using PostgreSQL storage")
        return PostgresStorage()
    logger.info("Using file storage")
    return FileStorage()


@app.on_event("startup")
async def startup():
    """Initialize storage and the practice engine on startup."""
    global storage, engine
    if engine is not None:
        return
    storage = create_storage()
    engine = PracticeEngine(storage, AsyncioScheduler())
    engine.load()


@app.on_event("shutdown")
async def shutdown():
    """Cancel every pending round callback."""
    if engine is not None:
        engine.teardown_all()


def _round_or_404(round_id: str):
    try:
        return engine.handle_for(round_id)
    except UnknownRound:
        raise HTTPException(status_code=404, detail=f"Round {round_id} not found")


@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "drills": sorted(DRILLS)}


@app.get("/api/status", response_model=StatusResponse)
async def get_status():
    """Dictionary size, language and progress summary."""
    view = VocabularyView(engine.entries)
    return StatusResponse(
        language=engine.language,
        languages=list(LANGUAGES),
        entry_count=len(view),
        word_count=len(view.words()),
        phrase_count=len(view.phrases()),
        high_score=engine.high_scores.load(),
        mistake_count=sum(engine.ledger.load().values()),
        active_rounds=engine.active_rounds
    )


# Dictionary Endpoints
@app.get("/api/entries")
async def list_entries(q: str = ""):
    """List dictionary entries, fuzzy-filtered by q."""
    entries = VocabularyView(engine.load_entries()).search(q)
    return {"entries": [e.to_dict() for e in entries], "count": len(entries)}


@app.post("/api/entries")
async def create_entry(request: EntryModel):
    """Add a dictionary entry."""
    if request.Type not in (WORD, PHRASE):
        raise HTTPException(status_code=422, detail=f"Type must be '{WORD}' or '{PHRASE}'")
    entry = Entry.from_dict(request.model_dump())
    if not entry.english:
        raise HTTPException(status_code=422, detail="English text is required")
    try:
        engine.entries = add_entry(storage, entry)
    except DuplicateIdentity as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceUnavailable as e:
        logger.error(f"Failed to save entry {entry.english!r}: {e}")
        raise HTTPException(status_code=503, detail="Dictionary storage unavailable")
    logger.info(f"Added {entry.type} {entry.english!r}")
    return {"success": True, "entry": entry.to_dict(), "count": len(engine.entries)}


# Settings Endpoints
@app.get("/api/settings")
async def get_settings():
    return engine.load_settings()


@app.put("/api/settings")
async def update_settings(request: SettingsRequest):
    try:
        return engine.save_settings(request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except PersistenceUnavailable as e:
        logger.error(f"Failed to save settings: {e}")
        raise HTTPException(status_code=503, detail="Settings storage unavailable")


@app.get("/api/mistakes")
async def get_mistakes(limit: int = 20):
    """Entries with the most recorded mistakes."""
    engine.ledger.load()
    ranked = engine.ledger.most_missed(limit)
    return {"mistakes": [{"english": english, "count": count} for english, count in ranked]}


# Round Endpoints
@app.post("/api/rounds")
async def start_round(request: StartRoundRequest):
    """Start a drill round; any previous round is torn down."""
    if request.kind not in DRILLS:
        raise HTTPException(status_code=422, detail=f"Unknown drill: {request.kind}")
    try:
        handle = engine.start_round(request.kind, ledger_snapshot=request.ledger_snapshot)
    except InsufficientVocabulary as e:
        raise HTTPException(status_code=409, detail=str(e))
    return engine.snapshot(handle)


@app.get("/api/rounds/{round_id}")
async def get_round(round_id: str):
    return engine.snapshot(_round_or_404(round_id))


@app.post("/api/rounds/{round_id}/answer", response_model=OutcomeResponse)
async def submit_answer(round_id: str, request: AnswerRequest):
    handle = _round_or_404(round_id)
    if handle.kind == 'lane-match':
        if request.tile_id is None or request.target is None:
            raise HTTPException(status_code=422, detail="tile_id and target are required")
        choice = (request.tile_id, request.target)
    else:
        if request.choice is None:
            raise HTTPException(status_code=422, detail="choice is required")
        choice = request.choice
    outcome = engine.submit_answer(handle, choice)
    return OutcomeResponse(**outcome.to_dict(), round=engine.snapshot(handle))


@app.post("/api/rounds/{round_id}/tick")
async def tick_round(round_id: str, request: TickRequest):
    """Advance a time-based drill by one display frame."""
    if request.elapsed < 0:
        raise HTTPException(status_code=422, detail="elapsed must not be negative")
    handle = _round_or_404(round_id)
    engine.tick(handle, request.elapsed)
    return engine.snapshot(handle)


@app.post("/api/rounds/{round_id}/begin")
async def begin_round(round_id: str):
    handle = _round_or_404(round_id)
    started = engine.begin(handle)
    return {"started": started, "round": engine.snapshot(handle)}


@app.post("/api/rounds/{round_id}/restart")
async def restart_round(round_id: str):
    handle = _round_or_404(round_id)
    try:
        engine.restart(handle)
    except InsufficientVocabulary as e:
        engine.teardown(handle)
        raise HTTPException(status_code=409, detail=str(e))
    return engine.snapshot(handle)


@app.post("/api/rounds/{round_id}/hold")
async def hold_tile(round_id: str, request: HoldRequest):
    handle = _round_or_404(round_id)
    return {"held": engine.hold(handle, request.tile_id)}


@app.post("/api/rounds/{round_id}/release")
async def release_tile(round_id: str):
    handle = _round_or_404(round_id)
    engine.release(handle)
    return {"held": False}


@app.post("/api/rounds/{round_id}/reveal-complete")
async def reveal_complete(round_id: str):
    """Visual-completion signal for a correctly answered quiz question."""
    handle = _round_or_404(round_id)
    advanced = engine.complete_reveal(handle)
    return {"advanced": advanced, "round": engine.snapshot(handle)}


@app.delete("/api/rounds/{round_id}")
async def teardown_round(round_id: str):
    """Cancel all pending callbacks for a round. Repeated calls are harmless."""
    engine.teardown(round_id)
    return {"success": True}
