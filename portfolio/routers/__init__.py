"""
FastAPI routers grouped by domain (slug, projects).

Each module exposes an APIRouter included by portfolio.app.create_app().
Routers resolve their services from app.state and translate service
exceptions into HTTP responses.
"""
