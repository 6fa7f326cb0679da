# Services package init
"""
Blog API — Services Layer
===========================

What:  Business logic between routes (HTTP) and stores (persistence).

Service Inventory:
    - BlogService: identifier/body validation, update-merge policy, and
      translation of store results into responses and typed errors
"""
