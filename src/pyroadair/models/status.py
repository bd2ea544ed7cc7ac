"""Playback and load status models exposed to UI collaborators."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlaybackState(BaseModel):
    """Time cursor and play mode.

    ``current_time`` only ever holds whole hours.
    """

    model_config = ConfigDict(frozen=True)

    current_time: datetime
    is_playing: bool = False

    @field_validator("current_time")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class LoadState(BaseModel):
    """Busy flag and the epoch of the most recently issued load."""

    model_config = ConfigDict(frozen=True)

    is_loading: bool = False
    request_epoch: int = Field(default=0, ge=0)
