"""
Server-side project form session.

Plays the host role for SlugAvailabilityController: stores the emitted slug as
form state, feeds the title on every change and closes the controller when the
form is submitted or discarded.

A long-lived front end (e.g. a websocket handler on the event loop) keeps one
session per open form and forwards field events to set_title/edit_slug/
generate_slug, reading `availability` and `preview_url` back. One-shot hosts
such as scripts/add_project.py fill the form inside asyncio.run() and await
wait_for_check() before reading the advisory result or submitting.
"""

from __future__ import annotations

import logging

from portfolio.db.models import Project
from portfolio.domain.slugs import AvailabilityState, project_url
from portfolio.services.project_service import ProjectFormData, ProjectService
from portfolio.services.slug_controller import SlugAvailabilityController

log = logging.getLogger(__name__)


class ProjectFormSession:
    """One create or edit session of the project form."""

    def __init__(
        self,
        service: ProjectService | None = None,
        *,
        check_slugs: bool = True,
        debounce_seconds: float | None = None,
    ) -> None:
        self.service = service or ProjectService()
        self.data = ProjectFormData()
        self.project_id: str | None = None
        self._check_slugs = check_slugs
        self._debounce_seconds = debounce_seconds
        self.controller = self._new_controller()

    def _new_controller(self, customized: bool = False) -> SlugAvailabilityController:
        checker = None
        if self._check_slugs:
            checker = self.service.slug_service.checker(exclude_id=self.project_id)
        return SlugAvailabilityController(
            self._store_slug,
            checker,
            value=self.data.slug,
            customized=customized,
            debounce_seconds=self._debounce_seconds,
            logger=log,
        )

    def _store_slug(self, slug: str) -> None:
        self.data.slug = slug

    # ------------------------------------------------------------ form events
    def load(self, project: Project | None) -> None:
        """Bind the form to an existing project (edit) or to a blank one (create)."""
        self.controller.close()
        self.project_id = project.id if project is not None else None
        self.data = ProjectFormData.from_project(project) if project is not None else ProjectFormData()
        self.controller = self._new_controller()
        self.controller.reset_for_new_entity()
        self.controller.load_value(self.data.slug)

    def set_title(self, title: str) -> None:
        self.data.title = title
        self.controller.on_title_changed(title)

    def edit_slug(self, raw_text: str) -> None:
        self.controller.on_slug_edited(raw_text)

    def generate_slug(self) -> None:
        self.controller.regenerate_from_title(self.data.title)

    # ----------------------------------------------------------------- status
    @property
    def availability(self) -> AvailabilityState:
        return self.controller.availability

    @property
    def preview_url(self) -> str:
        return project_url(self.data.slug)

    @property
    def can_submit(self) -> bool:
        # availability is advisory: unknown or checking never blocks
        return bool(self.data.title.strip() and self.data.slug)

    async def wait_for_check(self, timeout: float | None = None) -> None:
        await self.controller.wait_idle(timeout)

    # -------------------------------------------------------------- lifecycle
    def submit(self) -> Project:
        """Close the controller and persist; the service re-checks the slug."""
        was_customized = self.controller.is_customized
        self.controller.close()
        try:
            if self.project_id:
                project = self.service.update_project(self.project_id, self.data)
            else:
                project = self.service.create_project(self.data)
        except Exception:
            # the form stays mounted after a rejected submission
            self.controller = self._new_controller(customized=was_customized)
            raise
        log.info("Projeto salvo: %s (%s)", project.id, project.slug)
        return project

    def close(self) -> None:
        self.controller.close()
