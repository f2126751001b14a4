"""HTTP middleware."""

from issueforge.middleware.timing import timing_middleware

__all__ = ["timing_middleware"]
