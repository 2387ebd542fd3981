"""
Core utilities shared across the portfolio back end.

This package hosts:
- configuration helpers (env vars, public base URL, database URL, debounce)
- logging setup used by the app factory and the CLI scripts

Services and routers depend on these primitives instead of reading
os.environ directly.
"""
