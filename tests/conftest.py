from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote portfolio seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from portfolio.core import config as core_config  # noqa: E402
from portfolio.db import create_tables  # noqa: E402
from portfolio.db import session as db_session  # noqa: E402


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Settings previsíveis para cada teste."""
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://portfolio.test")
    monkeypatch.delenv("SLUG_CHECK_DEBOUNCE_MS", raising=False)
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Configura um SQLite temporário e garante teardown completo para não deixar o arquivo bloqueado no Windows."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    # limpa caches para forçar re-leitura de envs
    _clear_caches()

    create_tables.create_all(reset=True)
    engine = db_session.get_engine()

    yield db_file

    create_tables.drop_all()
    engine.dispose()
    _clear_caches()
