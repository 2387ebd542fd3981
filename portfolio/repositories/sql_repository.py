"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select, update

from portfolio.db.models import Project
from portfolio.db.session import get_session

PROJECT_FIELDS = (
    "title",
    "slug",
    "description",
    "full_description",
    "image_url",
    "technologies",
    "github_url",
    "live_url",
    "order_index",
    "is_featured",
    "is_active",
)


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- projects --------------------------
    def get_project(self, project_id: str) -> Optional[Project]:
        with get_session() as session:
            return session.get(Project, project_id)

    def get_project_by_slug(self, slug: str) -> Optional[Project]:
        with get_session() as session:
            stmt = select(Project).where(Project.slug == slug)
            return session.execute(stmt).scalar_one_or_none()

    def list_projects(self, *, only_active: bool = False) -> list[Project]:
        with get_session() as session:
            stmt = select(Project).order_by(Project.order_index, Project.created_at)
            if only_active:
                stmt = stmt.where(Project.is_active.is_(True))
            return list(session.execute(stmt).scalars().all())

    def slug_exists(self, slug: str, exclude_id: str | None = None) -> bool:
        slug_value = (slug or "").strip()
        if not slug_value:
            return False
        with get_session() as session:
            stmt = select(Project.id).where(Project.slug == slug_value)
            if exclude_id:
                stmt = stmt.where(Project.id != exclude_id)
            return session.execute(stmt.limit(1)).first() is not None

    def next_order_index(self) -> int:
        with get_session() as session:
            current = session.execute(select(func.max(Project.order_index))).scalar()
            return 0 if current is None else int(current) + 1

    def create_project(self, **fields) -> Project:
        now = datetime.now(timezone.utc)
        values = {k: v for k, v in fields.items() if k in PROJECT_FIELDS}
        entity = Project(
            id=fields.get("id") or str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            **values,
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def update_project(self, project_id: str, **fields) -> Optional[Project]:
        values = {k: v for k, v in fields.items() if k in PROJECT_FIELDS}
        values["updated_at"] = datetime.now(timezone.utc)
        with get_session() as session:
            stmt = update(Project).where(Project.id == project_id).values(**values)
            result = session.execute(stmt)
            session.commit()
            if not result.rowcount:
                return None
            return session.get(Project, project_id)
