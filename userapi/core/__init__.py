"""
Core utilities shared across the user API.

This package hosts configuration helpers (env vars, paths, paging limits),
logging setup and small cross-cutting helpers. Routers, services and stores
depend on these primitives instead of reading the environment themselves.
"""
