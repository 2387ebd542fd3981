"""Create (or rebuild) the database schema for the configured DATABASE_URL."""
from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata


def create_all(reset: bool = False) -> None:
    engine = get_engine()
    if reset:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def drop_all() -> None:
    Base.metadata.drop_all(bind=get_engine())


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Cria as tabelas do portfolio")
    ap.add_argument("--reset", action="store_true", help="apaga as tabelas antes de recriar")
    args = ap.parse_args(argv)
    try:
        create_all(reset=args.reset)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    print("Database tables created successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
