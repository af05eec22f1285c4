# Routes package init
"""
Diario de Classe API — API Routes Package
==========================================

Route Inventory:
    - posts.py:   GET/POST /posts, GET /posts/search,
                  GET/PUT/DELETE /posts/{id}
    - health.py:  GET /health

Design Principle:
    Routes are thin: extract request values, call PostService, return the
    envelope. Business rules live in services/.
"""
