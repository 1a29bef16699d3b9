"""FastAPI server for dojo drills."""

import logging
import os
import uuid

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from core.models import DrillSession
from core.content import DrillItem
from core.selector import AdaptiveSelector, InvalidPoolError
from core.kana import GROUP_DISPLAY_NAMES, get_all_groups, kana_items
from core.interfaces import Storage

from server.file_storage import FileStorage
from server.postgres_storage import PostgresStorage

# Config keys passed through to AdaptiveSelector
SELECTOR_SETTINGS = ('correct_factor', 'wrong_factor', 'min_weight', 'max_weight', 'recency_size')

# User ids name weight files and table rows
USER_ID_PATTERN = r"^[A-Za-z0-9_-]+$"


# Pydantic models for API
class DrillItemModel(BaseModel):
    char: str = Field(min_length=1)
    meanings: list[str] = Field(min_length=1)
    kunyomi: list[str] = []
    onyomi: list[str] = []


class StartDrillRequest(BaseModel):
    user_id: str = Field("default", pattern=USER_ID_PATTERN)
    items: list[DrillItemModel] = []
    groups: list[str] = []
    reverse: bool = False


class AnswerRequest(BaseModel):
    answer: str


class PromptResponse(BaseModel):
    drill_id: str
    key: str
    reverse: bool
    pool_size: int
    stats: dict


class AnswerResponse(BaseModel):
    key: str
    answer: str
    correct: bool
    expected: list[str]
    next_key: str
    weight: float
    stats: dict


class WeightsResponse(BaseModel):
    user_id: str
    total: int
    weights: dict[str, float]
    recent: list[str]


# Process state: one selector per user, shared by all of that user's drills
storage: Storage = None
selector_settings: dict = {}
user_selectors: dict[str, AdaptiveSelector] = {}
drills: dict[str, dict] = {}  # drill_id -> {user_id, session}


def get_selector(user_id: str = "default") -> AdaptiveSelector:
    """Get or create the selector shared by every drill of a user."""
    if user_id not in user_selectors:
        state = storage.load_weights(user_id) if storage else None
        if state:
            user_selectors[user_id] = AdaptiveSelector.from_dict(state, **selector_settings)
            logger.info(f"Loaded {len(user_selectors[user_id])} weights for {user_id}")
        else:
            user_selectors[user_id] = AdaptiveSelector(**selector_settings)
    return user_selectors[user_id]


def save_selector(user_id: str = "default") -> None:
    """Save a user's weight table."""
    if storage and user_id in user_selectors:
        storage.save_weights(user_selectors[user_id].to_dict(), user_id)


def get_drill(drill_id: str) -> dict:
    drill = drills.get(drill_id)
    if drill is None:
        raise HTTPException(status_code=404, detail=f"Drill not found: {drill_id}")
    return drill


def load_selector_settings(config: dict) -> dict:
    """Pick the selector settings out of a config and check them.

    Raises RuntimeError if the values would not build a selector, so a bad
    config stops the server at startup.
    """
    settings = {k: config[k] for k in SELECTOR_SETTINGS if k in config}
    try:
        AdaptiveSelector(**settings)
    except (TypeError, ValueError) as e:
        raise RuntimeError(f"Invalid selector settings in config: {e}")
    return settings


def prompt_response(drill_id: str, session: DrillSession) -> PromptResponse:
    return PromptResponse(
        drill_id=drill_id,
        key=session.current_key,
        reverse=session.reverse,
        pool_size=len(session.items),
        stats=session.stats()
    )


app = FastAPI(title="Dojo API", description="Adaptive kana and kanji drill API")


@app.on_event("startup")
async def startup():
    """Initialize storage and selector settings on startup."""
    global storage, selector_settings

    # File storage by default, set DOJO_STORAGE=postgres to use PostgreSQL
    storage_type = os.environ.get('DOJO_STORAGE', 'file')
    if storage_type == 'postgres':
        storage = PostgresStorage()
        logger.info("Using PostgreSQL storage")
    else:
        storage = FileStorage()
        logger.info("Using file storage")

    try:
        config = storage.load_config()
    except FileNotFoundError:
        config = {}
    selector_settings = load_selector_settings(config)
    if selector_settings:
        logger.info(f"Selector settings from config: {selector_settings}")


@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "drills": len(drills)}


@app.get("/api/kana/groups")
async def list_kana_groups():
    """List the kana groups a drill can be built from."""
    return {
        "groups": [
            {"key": group, "name": GROUP_DISPLAY_NAMES[group]}
            for group in get_all_groups()
        ]
    }


@app.post("/api/drills", response_model=PromptResponse)
async def start_drill(request: StartDrillRequest):
    """Start a drill over explicit items and/or kana groups."""
    items = [DrillItem.from_dict(item.model_dump()) for item in request.items]
    try:
        items += kana_items(request.groups)
    except KeyError as e:
        raise HTTPException(status_code=400, detail=str(e.args[0]))

    selector = get_selector(request.user_id)
    try:
        session = DrillSession(items, selector, reverse=request.reverse)
    except InvalidPoolError as e:
        raise HTTPException(status_code=400, detail=str(e))

    drill_id = str(uuid.uuid4())[:8]
    drills[drill_id] = {'user_id': request.user_id, 'session': session}
    logger.info(f"Drill {drill_id} started for {request.user_id}: "
                f"{len(items)} items, reverse={request.reverse}")
    return prompt_response(drill_id, session)


@app.get("/api/drills/{drill_id}", response_model=PromptResponse)
async def get_drill_status(drill_id: str):
    """Get the current prompt of a drill."""
    session = get_drill(drill_id)['session']
    return prompt_response(drill_id, session)


@app.post("/api/drills/{drill_id}/answer", response_model=AnswerResponse)
async def submit_answer(drill_id: str, request: AnswerRequest):
    """Check an answer and move the drill along."""
    drill = get_drill(drill_id)
    session = drill['session']

    result = session.submit(request.answer)
    if result is None:
        raise HTTPException(status_code=400, detail="Answer is empty")
    save_selector(drill['user_id'])

    return AnswerResponse(
        **result.to_dict(),
        weight=session.selector.get_weight(result.key),
        stats=session.stats()
    )


@app.post("/api/drills/{drill_id}/skip", response_model=PromptResponse)
async def skip_character(drill_id: str):
    """Skip the current character."""
    session = get_drill(drill_id)['session']
    skipped = session.current_key
    session.skip()
    logger.info(f"Drill {drill_id}: skipped {skipped}")
    return prompt_response(drill_id, session)


@app.get("/api/drills/{drill_id}/weak")
async def get_weak_characters(drill_id: str, limit: int = Query(10, ge=1)):
    """Characters of a drill the learner struggles with most."""
    session = get_drill(drill_id)['session']
    weak = session.get_weak_characters(limit)
    return {"total": len(weak), "characters": weak}


@app.delete("/api/drills/{drill_id}")
async def end_drill(drill_id: str):
    """End a drill and return its final stats."""
    drill = get_drill(drill_id)
    del drills[drill_id]
    save_selector(drill['user_id'])
    logger.info(f"Drill {drill_id} ended for {drill['user_id']}")
    return {"drill_id": drill_id, "stats": drill['session'].stats()}


@app.get("/api/weights", response_model=WeightsResponse)
async def get_weights(user_id: str = Query("default", pattern=USER_ID_PATTERN)):
    """Get a user's weight table."""
    selector = get_selector(user_id)
    return WeightsResponse(
        user_id=user_id,
        total=len(selector),
        weights=selector.weights,
        recent=selector.recent
    )


@app.delete("/api/weights")
async def reset_weights(user_id: str = Query("default", pattern=USER_ID_PATTERN)):
    """Forget everything the selector learned about a user."""
    selector = get_selector(user_id)
    selector.reset()
    save_selector(user_id)
    logger.info(f"Weights reset for {user_id}")
    return {"success": True, "user_id": user_id}


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
