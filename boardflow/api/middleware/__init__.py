"""HTTP middleware."""

from boardflow.api.middleware.logging_middleware import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
