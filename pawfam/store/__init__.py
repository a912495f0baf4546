# Session-scoped stores

from .cart import CartStore

__all__ = ["CartStore"]
