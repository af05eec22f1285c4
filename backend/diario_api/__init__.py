"""
Diario de Classe API — Application Package Initializer
=======================================================

What: Marks the `diario_api` directory as a Python package.
Why:  Enables module imports like `from diario_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, orchestration
    ├─────────────────────────────────────┤
    │      Repositories (Persistence)     │  ← In-memory list or MongoDB
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Post record + Pydantic contracts
    └─────────────────────────────────────┘

    Routes never touch a repository directly, and services never see a
    request object. The repository is chosen by configuration and handed
    to the service when the application is built.
"""

__version__ = "1.0.0"
