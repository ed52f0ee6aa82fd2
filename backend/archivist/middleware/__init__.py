# Middleware package init
"""
Archivist Backend - Middleware Package
========================================

Middleware Chain:
    Request → [CORS] → [Request ID] → [Logging] → Route Handler

    Request ID runs before Logging so every access line carries the id.
    CORS is outermost so preflight requests are answered without logging.
"""
