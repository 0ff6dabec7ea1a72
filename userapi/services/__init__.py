"""
High-level use cases for the user API.

Service modules orchestrate the stores to implement the business rules
(presence checks, paging, demo reset). Routers call these services instead
of touching the store directly.
"""
