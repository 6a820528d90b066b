"""Base model for HyperTrack API payloads.

Every response model inherits from :class:`HypertrackBaseModel` which
provides:

* ``extra="ignore"`` so fields the API adds later do not break parsing.
* A ``model_validator(mode="before")`` that stashes the original payload
  in ``raw``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class HypertrackBaseModel(BaseModel):
    """Base for HyperTrack API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API payload."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        # Keep an explicitly provided raw= when constructing with kwargs.
        if "raw" in values:
            return values
        merged = dict(values)
        merged["raw"] = dict(values)
        return merged
