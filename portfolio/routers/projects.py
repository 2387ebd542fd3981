from __future__ import annotations

import html

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from portfolio.services.project_service import (
    ProjectFormData,
    ProjectNotFoundError,
    ProjectService,
    ProjectValidationError,
    project_to_dict,
    split_technologies,
)
from portfolio.services.slug_service import InvalidSlugError, SlugUnavailableError

router = APIRouter(tags=["projects"])


def _get_project_service(request: Request) -> ProjectService:
    svc = getattr(getattr(request.app, "state", None), "project_service", None)
    if not svc:
        raise RuntimeError("ProjectService nao configurado")
    return svc


def _form_data(
    title: str,
    slug: str,
    description: str,
    full_description: str,
    image_url: str,
    technologies: str,
    github_url: str,
    live_url: str,
    order_index: int | None,
    is_featured: bool,
    is_active: bool,
) -> ProjectFormData:
    return ProjectFormData(
        title=title,
        slug=slug,
        description=description,
        full_description=full_description,
        image_url=image_url,
        technologies=split_technologies(technologies),
        github_url=github_url,
        live_url=live_url,
        order_index=order_index,
        is_featured=is_featured,
        is_active=is_active,
    )


def _save(request: Request, data: ProjectFormData, project_id: str | None = None):
    svc = _get_project_service(request)
    try:
        if project_id:
            project = svc.update_project(project_id, data)
        else:
            project = svc.create_project(data)
    except (ProjectValidationError, InvalidSlugError) as exc:
        return HTMLResponse(html.escape(str(exc)), status_code=400)
    except SlugUnavailableError as exc:
        return HTMLResponse(html.escape(str(exc)), status_code=409)
    except ProjectNotFoundError:
        raise HTTPException(404, "Projeto nao encontrado")
    return RedirectResponse(f"/admin/projects/{html.escape(project.id)}", status_code=303)


@router.post("/admin/projects")
def project_create(
    request: Request,
    title: str = Form(""),
    slug: str = Form(""),
    description: str = Form(""),
    full_description: str = Form(""),
    image_url: str = Form(""),
    technologies: str = Form(""),
    github_url: str = Form(""),
    live_url: str = Form(""),
    order_index: int | None = Form(None),
    is_featured: bool = Form(False),
    is_active: bool = Form(True),
):
    data = _form_data(
        title, slug, description, full_description, image_url, technologies,
        github_url, live_url, order_index, is_featured, is_active,
    )
    return _save(request, data)


@router.post("/admin/projects/{project_id}")
def project_update(
    project_id: str,
    request: Request,
    title: str = Form(""),
    slug: str = Form(""),
    description: str = Form(""),
    full_description: str = Form(""),
    image_url: str = Form(""),
    technologies: str = Form(""),
    github_url: str = Form(""),
    live_url: str = Form(""),
    order_index: int | None = Form(None),
    is_featured: bool = Form(False),
    is_active: bool = Form(True),
):
    data = _form_data(
        title, slug, description, full_description, image_url, technologies,
        github_url, live_url, order_index, is_featured, is_active,
    )
    return _save(request, data, project_id)


@router.get("/admin/projects/{project_id}")
def project_detail(project_id: str, request: Request):
    project = _get_project_service(request).repository.get_project(project_id)
    if not project:
        raise HTTPException(404, "Projeto nao encontrado")
    return project_to_dict(project)


@router.get("/projeto/{slug}")
def project_public(slug: str, request: Request):
    project = _get_project_service(request).repository.get_project_by_slug(slug)
    if not project or not project.is_active:
        raise HTTPException(404, "Projeto nao encontrado")
    return project_to_dict(project)
