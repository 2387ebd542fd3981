"""Entry point for the portfolio FastAPI app (uvicorn portfolio.app_factory:app)."""
from portfolio.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
