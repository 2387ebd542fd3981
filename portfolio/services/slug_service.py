"""Slug-related use cases (availability checks, submission-time validation)."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from portfolio.domain.slugs import is_canonical
from portfolio.repositories.sql_repository import SQLRepository


class SlugError(Exception):
    """Base exception for slug workflow."""


class InvalidSlugError(SlugError):
    """Raised when value is empty or not in canonical form."""


class SlugUnavailableError(SlugError):
    """Raised when slug is already taken by another project."""


class SlugService:
    """Provides slug availability checks backed by the projects table."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def normalize(self, value: str | None) -> str:
        return (value or "").strip()

    def is_available(self, value: str | None, exclude_id: str | None = None) -> bool:
        candidate = self.normalize(value)
        if not is_canonical(candidate):
            return False
        if self.repository.slug_exists(candidate, exclude_id=exclude_id):
            return False
        return True

    def ensure_available(self, value: str | None, exclude_id: str | None = None) -> str:
        """Authoritative check used when a project form is submitted."""
        candidate = self.normalize(value)
        if not candidate:
            raise InvalidSlugError("O slug é obrigatório")
        if not is_canonical(candidate):
            raise InvalidSlugError("Use apenas letras minúsculas, números e hífens")
        if self.repository.slug_exists(candidate, exclude_id=exclude_id):
            raise SlugUnavailableError("Este slug já está em uso. Escolha outro.")
        return candidate

    def checker(self, exclude_id: str | None = None) -> Callable[[str], Awaitable[bool]]:
        """
        Build the async availability collaborator for a SlugAvailabilityController.

        The repository is synchronous, so the lookup runs in a worker thread to
        keep the event loop free while the user keeps typing.
        """
        async def check(slug: str) -> bool:
            return await asyncio.to_thread(self.is_available, slug, exclude_id)

        return check
