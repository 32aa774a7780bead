"""API route modules."""
from api.routes import bank, imports

__all__ = ["bank", "imports"]
