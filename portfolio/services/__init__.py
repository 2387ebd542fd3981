"""
High-level use cases for the portfolio back office.

Each service module orchestrates repositories to implement business rules
(check slug availability, create/edit projects, drive a project form).

Routers (FastAPI endpoints) and scripts call these services instead of
opening database sessions directly.
"""
