# Routes package init
"""
Blog API — API Routes Package
===============================

Route Inventory:
    - blogs.py:   GET/POST   /blogs
                  GET/PUT/DELETE /blogs/{id}
    - health.py:  GET /        (plain-text liveness)
                  GET /health  (store connectivity)

Routes are thin: they parse the request, call BlogService, and return its
response model. Status codes for failures come from the global exception
handlers.
"""
