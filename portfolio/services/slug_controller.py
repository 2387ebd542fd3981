"""
Live slug derivation and debounced availability checks for a project form.

The controller lives for one create/edit session of a form. It keeps the slug
in sync with the title until the user edits the slug by hand, and asks the
injected `check_availability` collaborator whether the current slug is free,
at most once per quiet period (debounce). Results are applied only when they
still match the live slug, so a slow answer for an old value never overwrites
the state of a newer one.

All operations are plain synchronous methods meant to be called from the
event loop thread; checks run as asyncio tasks on that loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional

from portfolio.core.config import get_settings
from portfolio.domain.slugs import AvailabilityState, derive

log = logging.getLogger(__name__)

SlugChangeCallback = Callable[[str], None]
AvailabilityCheck = Callable[[str], Awaitable[bool]]


class SlugAvailabilityController:
    """Owns the slug state machine of a single form session."""

    def __init__(
        self,
        on_slug_change: SlugChangeCallback,
        check_availability: Optional[AvailabilityCheck] = None,
        *,
        value: str = "",
        customized: bool = False,
        debounce_seconds: float | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if debounce_seconds is None:
            debounce_seconds = get_settings().slug_check_debounce_seconds
        self._on_slug_change = on_slug_change
        self._check = check_availability
        self._debounce = max(0.0, float(debounce_seconds))
        self._log = logger or log

        self._candidate = value or ""
        self._is_customized = bool(customized)
        self._availability = AvailabilityState.UNKNOWN
        self._last_checked: str | None = None
        self._last_result: bool | None = None

        self._timer: asyncio.TimerHandle | None = None
        self._scheduled_for: str | None = None
        self._in_flight: Dict[asyncio.Task, str] = {}
        self._closed = False

    # ------------------------------------------------------------------ state
    @property
    def candidate(self) -> str:
        return self._candidate

    @property
    def is_customized(self) -> bool:
        return self._is_customized

    @property
    def availability(self) -> AvailabilityState:
        return self._availability

    @property
    def last_checked_candidate(self) -> str | None:
        return self._last_checked

    @property
    def is_checking(self) -> bool:
        return self._availability is AvailabilityState.CHECKING

    @property
    def has_pending_check(self) -> bool:
        return self._timer is not None or bool(self._in_flight)

    @property
    def debounce_seconds(self) -> float:
        return self._debounce

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------- operations
    def on_title_changed(self, title: str | None) -> None:
        """Follow the title while the slug has not been customized."""
        if self._closed or self._is_customized:
            return
        self._apply(derive(title))

    def on_slug_edited(self, raw_text: str | None) -> None:
        """Manual edit: canonicalize the typed text and stop following the title."""
        if self._closed:
            return
        self._is_customized = True
        self._apply(derive(raw_text))

    def regenerate_from_title(self, title: str | None) -> None:
        """Explicit "generate from title": back to auto mode."""
        if self._closed:
            return
        self._is_customized = False
        self._apply(derive(title))

    def reset_for_new_entity(self) -> None:
        """Bind the controller to another record (new form or freshly loaded data)."""
        if self._closed:
            return
        self._is_customized = False
        self._last_checked = None
        self._last_result = None

    def load_value(self, slug: str | None) -> None:
        """
        Take a slug supplied by the host (e.g. fetched record) without emitting it.

        A non-empty stored slug is treated as customized so that later title
        edits do not rewrite a published URL; an empty one keeps auto mode.
        """
        if self._closed:
            return
        self._candidate = slug or ""
        if self._candidate:
            self._is_customized = True
        self._refresh()

    def close(self) -> None:
        """Tear down: drop the pending timer and ignore in-flight results."""
        if self._closed:
            return
        self._closed = True
        self._cancel_timer()
        for task in list(self._in_flight):
            task.cancel()

    async def wait_idle(self, timeout: float | None = None) -> None:
        """
        Wait until no check is scheduled or running.

        For hosts that are not a UI loop (scripts, request handlers) and need
        the advisory result before going on.
        """
        async def _drain() -> None:
            while self.has_pending_check and not self._closed:
                if self._in_flight:
                    await asyncio.wait(set(self._in_flight))
                else:
                    await asyncio.sleep(max(self._debounce / 4, 0.001))

        await asyncio.wait_for(_drain(), timeout)

    # -------------------------------------------------------------- internals
    def _apply(self, slug: str) -> None:
        if slug != self._candidate:
            self._candidate = slug
            self._on_slug_change(slug)
        self._refresh()

    def _refresh(self) -> None:
        slug = self._candidate
        if not slug:
            self._cancel_timer()
            self._availability = AvailabilityState.UNKNOWN
            return
        if self._check is None:
            self._availability = AvailabilityState.UNKNOWN
            return
        if slug == self._last_checked:
            self._cancel_timer()
            self._availability = self._state_for(self._last_result)
            return
        if slug in self._in_flight.values():
            self._cancel_timer()
            self._availability = AvailabilityState.CHECKING
            return
        if slug == self._scheduled_for:
            return
        self._schedule(slug)

    def _schedule(self, slug: str) -> None:
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._scheduled_for = slug
        self._timer = loop.call_later(self._debounce, self._fire, slug)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._scheduled_for = None

    def _fire(self, slug: str) -> None:
        self._timer = None
        self._scheduled_for = None
        if self._closed or slug != self._candidate:
            return
        self._availability = AvailabilityState.CHECKING
        task = asyncio.get_running_loop().create_task(self._run_check(slug))
        self._in_flight[task] = slug
        task.add_done_callback(self._forget)

    def _forget(self, task: asyncio.Task) -> None:
        self._in_flight.pop(task, None)

    async def _run_check(self, slug: str) -> None:
        try:
            available = bool(await self._check(slug))
        except Exception:
            if self._closed:
                return
            self._log.exception("Erro ao verificar slug %r", slug)
            if slug == self._candidate:
                self._availability = AvailabilityState.UNKNOWN
            return
        if self._closed:
            return
        if slug != self._candidate:
            self._log.debug("Resultado obsoleto descartado para slug %r", slug)
            return
        self._last_checked = slug
        self._last_result = available
        self._availability = self._state_for(available)

    @staticmethod
    def _state_for(result: bool | None) -> AvailabilityState:
        if result is None:
            return AvailabilityState.UNKNOWN
        return AvailabilityState.AVAILABLE if result else AvailabilityState.TAKEN
