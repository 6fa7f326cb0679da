# Middleware package init
"""
Blog API — Middleware Package
===============================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID first, so the access log line carries the correlation ID
    - Logging sees the final status code and total duration
"""
