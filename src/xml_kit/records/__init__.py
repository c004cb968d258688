from .models import Record, ResolvedLabel
from .resolver import Resolver
from .walker import DEFAULT_CHUNK_SIZE, RecordWalker, transform

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "Record",
    "RecordWalker",
    "ResolvedLabel",
    "Resolver",
    "transform",
]
