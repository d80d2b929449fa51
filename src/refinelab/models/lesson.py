"""Pydantic models for the writing lesson library."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Lesson(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    category: str
    principles: tuple[str, ...] = ()
    strategies: tuple[str, ...] = ()
    checklist_items: tuple[str, ...] = ()
