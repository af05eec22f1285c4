"""
Diario de Classe API — FastAPI Dependencies
============================================

What:  Dependency providers that hand per-application objects to routes.
Why:   The repository and service are built by create_app() and stored on
       `app.state`; nothing is a module-level singleton, so each app
       instance (and each test) has its own store.
"""

from fastapi import Request

from diario_api.repositories.base import PostRepository
from diario_api.services.post_service import PostService


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service


def get_post_repository(request: Request) -> PostRepository:
    return request.app.state.post_service.repository
