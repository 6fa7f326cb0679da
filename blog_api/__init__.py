"""
Blog API — Application Package
================================

CRUD HTTP service over a single collection of blog-post documents.

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      BlogService (Business Logic)   │  ← Validation, update merge
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic request/response
    ├─────────────────────────────────────┤
    │     BlogStore (Mongo / SQL)         │  ← One call per operation
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
