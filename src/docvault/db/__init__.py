# Public DB API exports
from .base import Base
from .engine import DBEngine
from .models import DocumentRow

__all__ = [
    "Base",
    "DBEngine",
    "DocumentRow",
]
