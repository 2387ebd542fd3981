#!/usr/bin/env python3
"""
Cadastrar um novo projeto diretamente no banco.

Uso:
  python scripts/add_project.py --title "Projeto Incrível" [--slug meu-slug] [--description "..."]
  python scripts/add_project.py --title "Projeto Incrível" --dry-run
"""
from __future__ import annotations

import argparse
import asyncio
import sys

from portfolio.core.log import configure_logging
from portfolio.domain.slugs import AvailabilityState
from portfolio.services.project_form import ProjectFormSession
from portfolio.services.project_service import split_technologies

CHECK_TIMEOUT_SECONDS = 10.0


async def _fill_form(form: ProjectFormSession, args: argparse.Namespace) -> None:
    form.load(None)
    form.set_title(args.title.strip())
    if args.slug:
        form.edit_slug(args.slug)
    form.data.description = args.description
    form.data.technologies = split_technologies(args.technologies)
    form.data.is_featured = args.featured
    await form.wait_for_check(CHECK_TIMEOUT_SECONDS)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Cadastrar projeto no portfolio")
    ap.add_argument("--title", required=True, help="Titulo do projeto")
    ap.add_argument("--slug", help="Slug opcional (default: gerado do titulo)")
    ap.add_argument("--description", default="", help="Descricao curta")
    ap.add_argument("--technologies", default="", help="Lista separada por virgulas")
    ap.add_argument("--featured", action="store_true", help="Marcar como destaque")
    ap.add_argument("--dry-run", action="store_true", help="Apenas mostra o slug e a disponibilidade")
    args = ap.parse_args(argv)

    configure_logging()
    if not (args.title or "").strip():
        raise SystemExit("Titulo invalido")

    form = ProjectFormSession()
    asyncio.run(_fill_form(form, args))
    slug = form.data.slug

    if args.dry_run:
        available = form.availability is AvailabilityState.AVAILABLE
        form.close()
        print(f"Slug: {slug or '(vazio)'}")
        print(f"  URL: {form.preview_url}")
        print(f"  Disponibilidade: {form.availability.value}")
        return 0 if available else 1

    # a disponibilidade e apenas indicativa; submit() faz a checagem final
    project = form.submit()
    print("OK: projeto cadastrado")
    print(f"  ID: {project.id}")
    print(f"  Slug: {project.slug}")
    print(f"  URL: {form.preview_url}")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
