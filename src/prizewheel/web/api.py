"""FastAPI app serving spins to the browser wheel."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from threading import Lock
from typing import Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from prizewheel.config import ConfigLoadError, WheelConfig, load_config
from prizewheel.engine import ConfigError
from prizewheel.wheel import WheelSession

logger = logging.getLogger(__name__)

Phase = Literal["idle", "main", "bonus"]


class SectorItem(BaseModel):
    """Single sector as the client draws it."""

    index: int
    reward: str
    angle: float


class WheelResponse(BaseModel):
    """Static wheel layout and timing."""

    sectors: list[SectorItem]
    free_spins: int
    bonus_trigger: str
    spin_duration: float


class StepItem(BaseModel):
    """One draw and the sector the wheel stops on."""

    stream: Literal["main", "bonus"]
    reward: str
    sector: int = Field(ge=0)
    angle: float


class SpinPayload(BaseModel):
    main: StepItem
    bonus: list[StepItem] = Field(default_factory=list)
    bonus_total: int = 0
    triggered_bonus: bool = False


class SpinResponse(BaseModel):
    """Spin outcome, or a rejection when a spin is still in flight."""

    accepted: bool
    phase: Phase
    result: SpinPayload | None = None


class StateResponse(BaseModel):
    phase: Phase
    spins: int
    rejected_spins: int


app = FastAPI(title="Prize Wheel", version="0.1.0")


def get_cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env."""

    raw = os.getenv("CORS_ALLOW_ORIGINS", "*").strip()
    if raw == "*":
        return ["*"]
    return [item.strip() for item in raw.split(",") if item.strip()]


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Guards both the first session build and every spin state transition.
_session_lock = Lock()


@lru_cache(maxsize=1)
def get_config() -> WheelConfig:
    """Load config from PRIZEWHEEL_CONFIG, or use the stock wheel."""

    return load_config()


def get_seed() -> int | None:
    raw = os.getenv("PRIZEWHEEL_SEED", "").strip()
    return int(raw) if raw else None


@lru_cache(maxsize=1)
def get_session() -> WheelSession:
    """Return the process-wide wheel session."""

    try:
        session = WheelSession.from_config(get_config(), seed=get_seed())
    except (ConfigError, ConfigLoadError, FileNotFoundError, ValidationError) as exc:
        logger.error("Wheel configuration rejected: %s", exc)
        raise HTTPException(status_code=500, detail=f"Invalid wheel configuration: {exc}") from exc
    logger.info("Wheel session ready with %d sectors", len(session.layout))
    return session


@app.get("/api/wheel", response_model=WheelResponse)
def wheel() -> WheelResponse:
    """Describe sectors and timing for the client renderer."""

    with _session_lock:
        session = get_session()
    return WheelResponse(
        sectors=[
            SectorItem(index=sector.index, reward=sector.reward, angle=sector.angle)
            for sector in session.layout.sectors
        ],
        free_spins=session.free_spins,
        bonus_trigger=session.bonus_trigger,
        spin_duration=get_config().spin_duration,
    )


@app.post("/api/spin", response_model=SpinResponse)
def spin() -> SpinResponse:
    """Draw the next spin; rejected while the previous one is still animating."""

    with _session_lock:
        session = get_session()
        result = session.spin()
        phase = session.phase.value

    if result is None:
        return SpinResponse(accepted=False, phase=phase)
    return SpinResponse(accepted=True, phase=phase, result=SpinPayload.model_validate(result.as_dict()))


@app.post("/api/spin/finish", response_model=StateResponse)
def finish() -> StateResponse:
    """Spin finished signal from the client once the animation is over."""

    with _session_lock:
        session = get_session()
        session.finish()
        return _state(session)


@app.get("/api/state", response_model=StateResponse)
def state() -> StateResponse:
    with _session_lock:
        return _state(get_session())


def _state(session: WheelSession) -> StateResponse:
    return StateResponse(phase=session.phase.value, spins=session.spins, rejected_spins=session.rejected_spins)
