"""Custom middleware components."""

from recipe_importer.core.middleware.logging import LoggingMiddleware
from recipe_importer.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
