"""
Palette Backend: Middleware Package
====================================

Cross-cutting request handling shared by every route.

Execution order (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

Request ID runs first so the access log line and any error body carry the
same correlation ID.
"""
