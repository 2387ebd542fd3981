"""Project create/edit use cases for the back office."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Iterable

from sqlalchemy.exc import IntegrityError

from portfolio.db.models import Project
from portfolio.repositories.sql_repository import SQLRepository
from portfolio.services.slug_service import SlugService, SlugUnavailableError


class ProjectError(Exception):
    """Base exception for project workflow."""


class ProjectValidationError(ProjectError):
    """Raised when required form fields are missing or malformed."""


class ProjectNotFoundError(ProjectError):
    """Raised when trying to edit a project that does not exist."""


def split_technologies(value: str | Iterable[str] | None) -> list[str]:
    """Accept a list or a comma-separated string; drop blanks."""
    if not value:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if item and item.strip()]


@dataclass
class ProjectFormData:
    title: str = ""
    slug: str = ""
    description: str = ""
    full_description: str = ""
    image_url: str = ""
    technologies: list[str] = field(default_factory=list)
    github_url: str | None = None
    live_url: str | None = None
    order_index: int | None = None
    is_featured: bool = False
    is_active: bool = True

    @classmethod
    def from_project(cls, project: Project) -> "ProjectFormData":
        return cls(
            title=project.title or "",
            slug=project.slug or "",
            description=project.description or "",
            full_description=project.full_description or "",
            image_url=project.image_url or "",
            technologies=list(project.technologies or []),
            github_url=project.github_url,
            live_url=project.live_url,
            order_index=project.order_index,
            is_featured=bool(project.is_featured),
            is_active=bool(project.is_active),
        )


def project_to_dict(project: Project) -> dict:
    return {
        "id": project.id,
        "title": project.title,
        "slug": project.slug,
        "description": project.description,
        "full_description": project.full_description,
        "image_url": project.image_url,
        "technologies": list(project.technologies or []),
        "github_url": project.github_url,
        "live_url": project.live_url,
        "order_index": project.order_index,
        "is_featured": bool(project.is_featured),
        "is_active": bool(project.is_active),
    }


class ProjectService:
    """Validates project forms and persists them; owns the final slug check."""

    def __init__(
        self,
        repository: SQLRepository | None = None,
        slug_service: SlugService | None = None,
    ) -> None:
        self.repository = repository or SQLRepository()
        self.slug_service = slug_service or SlugService(self.repository)

    def _clean(self, data: ProjectFormData, exclude_id: str | None = None) -> dict:
        title = (data.title or "").strip()
        if not title:
            raise ProjectValidationError("O título é obrigatório")
        # raises InvalidSlugError / SlugUnavailableError
        slug = self.slug_service.ensure_available(data.slug, exclude_id=exclude_id)
        values = asdict(data)
        values.update(
            title=title,
            slug=slug,
            description=(data.description or "").strip(),
            full_description=(data.full_description or "").strip(),
            image_url=(data.image_url or "").strip(),
            technologies=split_technologies(data.technologies),
            github_url=(data.github_url or "").strip() or None,
            live_url=(data.live_url or "").strip() or None,
            is_featured=bool(data.is_featured),
            is_active=bool(data.is_active),
        )
        return values

    def create_project(self, data: ProjectFormData) -> Project:
        values = self._clean(data)
        if not values.get("order_index"):
            values["order_index"] = self.repository.next_order_index()
        try:
            return self.repository.create_project(**values)
        except IntegrityError as exc:
            # another session took the slug between the check and the insert
            raise SlugUnavailableError("Este slug já está em uso. Escolha outro.") from exc

    def update_project(self, project_id: str, data: ProjectFormData) -> Project:
        if not self.repository.get_project(project_id):
            raise ProjectNotFoundError(f"Project {project_id} not found")
        values = self._clean(data, exclude_id=project_id)
        if values.get("order_index") is None:
            values.pop("order_index")
        try:
            project = self.repository.update_project(project_id, **values)
        except IntegrityError as exc:
            raise SlugUnavailableError("Este slug já está em uso. Escolha outro.") from exc
        if project is None:
            raise ProjectNotFoundError(f"Project {project_id} not found")
        return project
