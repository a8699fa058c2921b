"""
API Routes Package
==================
Shared route utilities kept out of api.py.

Modules:
  helpers  - DB utilities, type coercion, log loading, analytics payloads
"""
