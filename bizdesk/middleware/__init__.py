"""HTTP middleware. Applied in bizdesk.main (first added = outermost)."""

from bizdesk.middleware.request_id import RequestIDMiddleware, request_id_var

__all__ = ["RequestIDMiddleware", "request_id_var"]
