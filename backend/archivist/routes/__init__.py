# Routes package init
"""
Archivist Backend - API Routes Package
========================================

Route Inventory:
    - assets.py:  GET /assets/{id}               (JSON envelope with metadata)
                  GET /assets/{id}/raw           (raw bytes)
                  GET /accounts/bild/1/1/{id}    (legacy alias, JSON)
                  GET /accounts/bild/1/1/1/{id}  (legacy alias, raw)
    - health.py:  GET /                          (liveness text)
                  GET /health                    (database + cache status)

Routes stay thin: they call AssetService and render the result.
"""
