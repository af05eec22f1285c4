# Services package init
"""
Diario de Classe API — Services Layer
======================================

What:  Business logic layer sitting between routes (HTTP) and repositories.
Why:   Routes handle HTTP, services handle rules; both stay small.

Service Inventory:
    - PostService: validates post input and orchestrates repository calls
"""
