from __future__ import annotations

from fastapi import APIRouter, Request

from portfolio.domain.slugs import derive, project_url
from portfolio.services.slug_service import SlugService

router = APIRouter(prefix="/slug", tags=["slug"])


def _get_slug_service(request: Request) -> SlugService:
    svc = getattr(getattr(request.app, "state", None), "slug_service", None)
    if not svc:
        raise RuntimeError("SlugService nao configurado")
    return svc


@router.get("/derive")
def slug_derive(text: str = ""):
    slug = derive(text)
    return {"slug": slug, "url": project_url(slug)}


@router.get("/check")
def slug_check(request: Request, value: str = "", exclude_id: str | None = None):
    svc = _get_slug_service(request)
    slug = derive(value)
    return {"slug": slug, "available": svc.is_available(slug, exclude_id=exclude_id or None)}
