# Middleware package init
"""
Diario de Classe API — Middleware Package
==========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the logging middleware can include it.
"""
