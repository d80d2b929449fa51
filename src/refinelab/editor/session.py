"""Editing session: live analysis plus manual and auto-save of one essay."""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from datetime import datetime

from refinelab.analyzer.scheduler import DebouncedAnalyzer
from refinelab.config import AppConfig
from refinelab.models.analysis import Draft, LiveMetrics, RevisionMarker, WritingSuggestion
from refinelab.store.essay_store import EssayStore

logger = logging.getLogger(__name__)


class EditorSession:
    """Owns a Draft, feeds every edit to the analyzer and saves to the store.

    Auto-save fires ``autosave_seconds`` after the last unsaved change; each
    new change restarts the timer. Saving never raises: failures are logged
    and kept in ``last_error``.
    """

    def __init__(
        self,
        store: EssayStore,
        essay_id: str,
        title: str = "",
        content: str = "",
        config: AppConfig | None = None,
    ):
        self.config = config or AppConfig()
        self.store = store
        self.essay_id = essay_id
        self.draft = Draft(title=title, content=content)
        self.analyzer = DebouncedAnalyzer(self.config.analyzer)
        self.has_unsaved_changes = False
        self.is_saving = False
        self.last_saved: datetime | None = None
        self.last_error: str | None = None
        self.revisions: list[RevisionMarker] = []
        self._autosave: asyncio.TimerHandle | None = None
        self._save_tasks: set[asyncio.Task] = set()

    @classmethod
    def open(cls, store: EssayStore, essay_id: str, config: AppConfig | None = None) -> EditorSession:
        essay = store.get(essay_id)
        if essay is None:
            raise LookupError(f"Essay not found: {essay_id}")
        return cls(store, essay.id, essay.title, essay.content, config)

    @property
    def metrics(self) -> LiveMetrics:
        return self.analyzer.metrics

    @property
    def suggestions(self) -> list[WritingSuggestion]:
        return self.analyzer.suggestions

    def start(self) -> LiveMetrics:
        """Run the initial analysis of the loaded text."""
        return self.analyzer.submit(self.draft.content)

    def edit_content(self, content: str) -> LiveMetrics:
        self.draft = self.draft.model_copy(update={"content": content})
        self._mark_changed()
        return self.analyzer.submit(content)

    def edit_title(self, title: str) -> None:
        self.draft = self.draft.model_copy(update={"title": title})
        self._mark_changed()

    def _mark_changed(self) -> None:
        self.has_unsaved_changes = True
        if self._autosave is not None:
            self._autosave.cancel()
        loop = asyncio.get_running_loop()
        self._autosave = loop.call_later(self.config.editor.autosave_seconds, self._fire_autosave)

    def _fire_autosave(self) -> None:
        self._autosave = None
        if not self.has_unsaved_changes:
            return
        task = asyncio.get_running_loop().create_task(self.save(auto=True))
        self._save_tasks.add(task)
        task.add_done_callback(self._save_tasks.discard)

    async def commit(self, title: str, content: str) -> bool:
        """Replace the whole draft and save it now, without arming auto-save."""
        self.draft = Draft(title=title, content=content)
        self.has_unsaved_changes = True
        return await self.save()

    async def save(self, auto: bool = False) -> bool:
        """Persist the draft. Returns True on success."""
        title, content = self.draft.title, self.draft.content
        self.is_saving = True
        try:
            saved = self.store.update(self.essay_id, title=title, content=content)
        except sqlite3.Error as e:
            logger.exception("Saving essay %s failed", self.essay_id)
            self.last_error = f"Error saving essay: {e}"
            return False
        finally:
            self.is_saving = False

        if not saved:
            logger.warning("Essay %s no longer exists; save skipped", self.essay_id)
            self.last_error = "Failed to save essay"
            return False

        self.last_saved = datetime.now()
        self.last_error = None
        # Edits made while saving stay unsaved
        if self.draft.title == title and self.draft.content == content:
            self.has_unsaved_changes = False
        self.revisions.append(
            RevisionMarker(timestamp=self.last_saved, word_count=len(content.split()))
        )
        logger.info("%s essay %s", "Auto-saved" if auto else "Saved", self.essay_id)
        return True

    async def wait_idle(self) -> None:
        """Wait for pending analysis and in-flight saves."""
        await self.analyzer.wait_idle()
        if self._save_tasks:
            await asyncio.gather(*self._save_tasks)

    def close(self) -> None:
        self.analyzer.cancel()
        if self._autosave is not None:
            self._autosave.cancel()
            self._autosave = None
