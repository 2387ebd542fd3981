from __future__ import annotations

import pytest

from portfolio.domain.slugs import AvailabilityState
from portfolio.services.project_form import ProjectFormSession
from portfolio.services.project_service import ProjectFormData, ProjectService
from portfolio.services.slug_service import InvalidSlugError, SlugUnavailableError


def test_create_flow_without_checks(temp_db):
    form = ProjectFormSession(check_slugs=False)
    form.load(None)
    form.set_title("Projeto Incrível!")
    assert form.data.slug == "projeto-incrivel"
    assert form.preview_url == "https://portfolio.test/projeto/projeto-incrivel"
    assert form.availability is AvailabilityState.UNKNOWN
    assert form.can_submit

    project = form.submit()
    assert project.slug == "projeto-incrivel"
    assert form.controller.closed


def test_edit_flow_keeps_published_slug(temp_db):
    existing = ProjectService().create_project(ProjectFormData(title="Antigo", slug="antigo"))
    form = ProjectFormSession(check_slugs=False)
    form.load(existing)

    form.set_title("Novo Título")
    assert form.data.slug == "antigo"

    form.generate_slug()
    assert form.data.slug == "novo-titulo"
    project = form.submit()
    assert project.id == existing.id
    assert project.slug == "novo-titulo"


def test_cannot_submit_without_slug(temp_db):
    form = ProjectFormSession(check_slugs=False)
    form.set_title("@@@")
    assert form.data.slug == ""
    assert not form.can_submit
    assert form.preview_url.endswith("/projeto/meu-projeto")


def test_rejected_submission_keeps_form_usable(temp_db):
    ProjectService().create_project(ProjectFormData(title="Dup", slug="dup"))
    form = ProjectFormSession(check_slugs=False)
    form.edit_slug("dup")
    form.set_title("Dup")
    with pytest.raises(SlugUnavailableError):
        form.submit()

    assert not form.controller.closed
    assert form.controller.is_customized
    form.edit_slug("dup-2")
    assert form.submit().slug == "dup-2"


def test_cleared_custom_slug_stays_custom_after_rejection(temp_db):
    form = ProjectFormSession(check_slugs=False)
    form.load(None)
    form.set_title("Meu Titulo")
    form.edit_slug("@@@")
    assert form.data.slug == ""
    with pytest.raises(InvalidSlugError):
        form.submit()

    form.set_title("Outro Titulo")
    assert form.controller.is_customized
    assert form.data.slug == ""

    form.generate_slug()
    assert form.data.slug == "outro-titulo"
    assert form.submit().slug == "outro-titulo"


@pytest.mark.asyncio
async def test_live_availability_against_database(temp_db):
    ProjectService().create_project(ProjectFormData(title="Meu App", slug="meu-app"))
    form = ProjectFormSession(debounce_seconds=0.01)
    form.load(None)

    form.set_title("Meu App")
    await form.wait_for_check(timeout=2)
    assert form.availability is AvailabilityState.TAKEN
    # advisory only
    assert form.can_submit

    form.edit_slug("meu-app-2")
    await form.wait_for_check(timeout=2)
    assert form.availability is AvailabilityState.AVAILABLE
    form.close()


@pytest.mark.asyncio
async def test_edit_session_excludes_own_record(temp_db):
    existing = ProjectService().create_project(ProjectFormData(title="Meu App", slug="meu-app"))
    form = ProjectFormSession(debounce_seconds=0.01)
    form.load(existing)
    await form.wait_for_check(timeout=2)
    assert form.availability is AvailabilityState.AVAILABLE
    form.close()
