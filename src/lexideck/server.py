import asyncio
import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

from lexideck.application.config import resolve_config
from lexideck.application.factory import build_session
from lexideck.application.session import StudySession
from lexideck.consts import VERSION
from lexideck.domain.exceptions import CatalogError, UnknownItemError
from lexideck.domain.models import LearningDirection, Rating

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("lexideck.server")

_session: StudySession | None = None
_session_lock = asyncio.Lock()


async def get_session() -> StudySession:
    """
    Lazily build and load the process-wide session.
    """
    global _session
    async with _session_lock:
        if _session is None:
            session = build_session(resolve_config())
            try:
                await session.reload()
            except CatalogError as e:
                logger.error(f"Catalog load failed: {e}")
                raise HTTPException(status_code=502, detail=str(e)) from e
            _session = session
    return _session


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"lexideck server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("lexideck server shutting down...")


app = FastAPI(
    title="lexideck",
    description="Spaced-repetition scheduling API for two-way vocabulary decks.",
    version=VERSION,
    lifespan=lifespan,
)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class ItemResponse(BaseModel):
    id: str
    prompt: str
    answer: str


class NextResponse(BaseModel):
    direction: LearningDirection
    item: ItemResponse | None


class ReviewRequest(BaseModel):
    item_id: str
    rating: Rating
    direction: LearningDirection = LearningDirection.PRIMARY


class ReviewResponse(BaseModel):
    key: str
    rating: Rating
    reps: int
    interval_ms: int
    next_review_at: int


start_time = time.time()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


@app.get("/next", response_model=NextResponse)
async def next_item(
    direction: LearningDirection = LearningDirection.PRIMARY,
    session: StudySession = Depends(get_session),
):
    """
    The item to review next, or null when nothing is owed right now.
    """
    item = session.next_item(direction)
    if item is None:
        return NextResponse(direction=direction, item=None)
    return NextResponse(
        direction=direction,
        item=ItemResponse(
            id=item.id, prompt=item.prompt(direction), answer=item.answer(direction)
        ),
    )


@app.post("/review", response_model=ReviewResponse)
async def review(req: ReviewRequest, session: StudySession = Depends(get_session)):
    """
    Record a rating and return the new schedule.
    """
    logger.info(f"Review: {req.item_id} {req.direction.value} {req.rating.value}")
    try:
        record = session.rate(req.item_id, req.direction, req.rating)
    except UnknownItemError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return ReviewResponse(
        key=record.key,
        rating=req.rating,
        reps=record.reps,
        interval_ms=record.interval_ms,
        next_review_at=record.next_review_at,
    )


@app.get("/stats")
async def get_stats(
    direction: LearningDirection = LearningDirection.PRIMARY,
    session: StudySession = Depends(get_session),
):
    return session.summary(direction).to_dict()


@app.post("/reload")
async def reload_catalog(session: StudySession = Depends(get_session)):
    """
    Re-fetch the catalog and purge progress for removed items.
    """
    try:
        purged = await session.reload()
    except CatalogError as e:
        logger.error(f"Reload failed: {e}")
        raise HTTPException(status_code=502, detail=str(e)) from e
    return {
        "items": len(session.catalog),
        "progress_entries": len(session.progress),
        "purged": purged,
    }
