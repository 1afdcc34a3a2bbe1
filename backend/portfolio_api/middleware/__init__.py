# Middleware package init
"""
Portfolio API Backend: Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID: correlation ID for logs and error bodies
    - Logging: one access line per request, with duration
    - GZip: compresses larger JSON lists
    - CORS: allow-listed origins only (FastAPI's CORSMiddleware)
"""
