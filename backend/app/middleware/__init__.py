# Middleware package init
"""
Floreria Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [Preflight] → [CORS] → [API Prefix]
            → [GZip] → Route Handler

    1. Request ID: correlation id for logs and the X-Request-ID header
    2. Logging: one access line per request, with the id
    3. Preflight: every OPTIONS → empty 200 with Access-Control-* headers
    4. CORS: Starlette's CORSMiddleware (headers on non-OPTIONS responses)
    5. API Prefix: /api/ramos → /ramos before routing
"""
