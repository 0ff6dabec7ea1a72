"""User CRUD demo API: a file-backed user collection served over HTTP."""

__version__ = "0.1.0"
