from pathlib import Path
import logging
import os

from fastapi import FastAPI, Depends, HTTPException, Request, status, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text

# ── local modules ───────────────────────────────────────────────────
from . import crud
from .db import engine, get_db, init_db
from .errors import DuplicateSlug, LookupFailed, ValidationError
from .logging_config import setup_logging
from .models import Event
from .schemas import BookingIn, BookingOut, BookingPatch, EventIn, EventOut, EventPatch
# ────────────────────────────────────────────────────────────────────

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="EventHub API")

# ───────────────────────── CORS ─────────────────────────────────────
from fastapi.middleware.cors import CORSMiddleware

def _clean(s: str | None) -> str | None:
    return s.strip().rstrip("/") if s and s.strip() else None

FRONTEND_ORIGIN = _clean(os.getenv("FRONTEND_ORIGIN")) or "http://localhost:3000"
_raw_extra = os.getenv("EXTRA_CORS_ORIGINS", "")
EXTRA = [x for x in (_clean(p) for p in _raw_extra.split(",")) if x]
allow_origins = ["*"] if "*" in EXTRA else [o for o in {FRONTEND_ORIGIN, *EXTRA} if o]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=86400,
)

# ───────────────────────── Error mapping ────────────────────────────
def _status_for(exc: ValidationError) -> int:
    if isinstance(exc, DuplicateSlug):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, LookupFailed):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_422_UNPROCESSABLE_ENTITY

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.info("%s %s rejected: %s (%s)", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=_status_for(exc), content=exc.to_dict())

# ───────────────────────── DB migrations (optional) ─────────────────
from alembic import command
from alembic.config import Config

def run_migrations() -> None:
    app_dir = Path(__file__).resolve().parent
    cfg = Config(str(app_dir / "alembic.ini"))
    cfg.set_main_option("script_location", str(app_dir / "migrations"))
    cfg.attributes["configure_logger"] = False
    command.upgrade(cfg, "head")

@app.on_event("startup")
def on_startup():
    if os.getenv("AUTO_MIGRATE") == "1":
        logger.info("Running migrations")
        run_migrations()
    else:
        init_db(engine)

# ───────────────────────── Lifecycle & health ───────────────────────
@app.get("/health")
def health_check():
    return {"status": "ok"}

@app.get("/")
def read_root():
    return {"message": "EventHub API is running."}

@app.get("/dbcheck")
def dbcheck(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"db": "ok"}

# ───────────────────────── Events ───────────────────────────────────
def _event_out(db: Session, ev: Event, count: int | None = None) -> EventOut:
    out = EventOut.model_validate(ev)
    out.bookingCount = crud.count_bookings(db, ev.id) if count is None else count
    return out

def _events_out(db: Session, events: list[Event]) -> list[EventOut]:
    counts = crud.count_bookings_by_event(db, [ev.id for ev in events])
    return [_event_out(db, ev, counts[ev.id]) for ev in events]

def _event_or_404(db: Session, slug: str) -> Event:
    ev = crud.get_event_by_slug(db, slug)
    if not ev:
        raise HTTPException(status_code=404, detail="Event not found")
    return ev

@app.get("/events", response_model=list[EventOut])
def list_events(
    tag: str | None = Query(default=None),
    mode: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    return _events_out(db, crud.list_events(db, tag=tag, mode=mode))

@app.post("/events", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventIn, db: Session = Depends(get_db)):
    ev = crud.create_event(db, payload.model_dump())
    return _event_out(db, ev)

@app.get("/events/{slug}", response_model=EventOut)
def get_event(slug: str, db: Session = Depends(get_db)):
    return _event_out(db, _event_or_404(db, slug))

@app.patch("/events/{slug}", response_model=EventOut)
def update_event(slug: str, payload: EventPatch, db: Session = Depends(get_db)):
    ev = _event_or_404(db, slug)
    ev = crud.update_event(db, ev, payload.model_dump(exclude_unset=True))
    return _event_out(db, ev)

@app.delete("/events/{slug}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(slug: str, db: Session = Depends(get_db)):
    crud.delete_event(db, _event_or_404(db, slug))
    return

@app.get("/events/{slug}/similar", response_model=list[EventOut])
def similar_events(slug: str, limit: int = Query(default=3, ge=1, le=20), db: Session = Depends(get_db)):
    ev = _event_or_404(db, slug)
    return _events_out(db, crud.list_similar_events(db, ev, limit=limit))

@app.get("/events/{slug}/bookings", response_model=list[BookingOut])
def event_bookings(slug: str, db: Session = Depends(get_db)):
    ev = _event_or_404(db, slug)
    return crud.list_bookings(db, ev.id)

# ───────────────────────── Bookings ─────────────────────────────────
def _booking_or_404(db: Session, booking_id: int):
    bk = crud.get_booking(db, booking_id)
    if not bk:
        raise HTTPException(status_code=404, detail="Booking not found")
    return bk

@app.post("/bookings", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
def create_booking(payload: BookingIn, db: Session = Depends(get_db)):
    return crud.create_booking(db, payload.model_dump())

@app.get("/bookings/{booking_id}", response_model=BookingOut)
def get_booking(booking_id: int, db: Session = Depends(get_db)):
    return _booking_or_404(db, booking_id)

@app.patch("/bookings/{booking_id}", response_model=BookingOut)
def update_booking(booking_id: int, payload: BookingPatch, db: Session = Depends(get_db)):
    bk = _booking_or_404(db, booking_id)
    return crud.update_booking(db, bk, payload.model_dump(exclude_unset=True))

@app.delete("/bookings/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(booking_id: int, db: Session = Depends(get_db)):
    crud.delete_booking(db, _booking_or_404(db, booking_id))
    return
