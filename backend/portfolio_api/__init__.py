"""
Portfolio API Backend: Application Package Initializer
======================================================

What: Marks the `portfolio_api` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend keeps the same layered structure for every resource:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Excerpts, upserts, uploads
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Stored documents + API contracts
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async MongoDB client
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
