"""
Archivist Backend - Application Package Initializer
=====================================================

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, rendering
    ├─────────────────────────────────────┤
    │   Services (AssetService)           │  ← id validation, TTL, fallback
    ├─────────────────────────────────────┤
    │   AssetCache      │   AssetStore    │  ← disk files │ SQL point lookup
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async SQLAlchemy engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
