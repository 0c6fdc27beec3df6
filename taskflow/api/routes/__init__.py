"""API routers, one per resource."""

from taskflow.api.routes import auth, tasks, users

__all__ = ["auth", "tasks", "users"]
