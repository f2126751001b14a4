"""API route modules for FastAPI endpoints."""

from issueforge.routes.issues import router as issues_router

__all__ = ["issues_router"]
