"""Persistent storage for essays."""

from refinelab.store.essay_store import EssayStore

__all__ = ["EssayStore"]
