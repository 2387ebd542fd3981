"""SQLAlchemy models for the portfolio content managed by the back office."""
from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    Text,
    JSON,
    func,
)

from .session import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    full_description = Column(Text, nullable=False, default="")
    image_url = Column(Text, nullable=False, default="")
    technologies = Column(JSON, nullable=False, default=list)
    github_url = Column(Text, nullable=True)
    live_url = Column(Text, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
