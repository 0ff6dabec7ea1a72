"""Request/response models (HTTP serialization boundary)."""

from .users import UserRead, UserWrite

__all__ = ["UserRead", "UserWrite"]
