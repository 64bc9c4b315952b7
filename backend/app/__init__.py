"""
TripPlanner Backend: Application Package
==========================================

Layers, top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← existence checks, error mapping
    ├─────────────────────────────────────┤
    │      Repositories (Data Access)     │  ← ORM queries, one session per call
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

app.container wires one instance of each layer per application.
"""

__version__ = "1.0.0"
