"""
AIOCoalesce, write-coalescing for asyncio applications.

Many small updates made during one turn of the event loop are merged and
written to a store in a single call.
"""

__all__ = [
    'Batcher',
    'Store',
    'MemoryStore',
]

__version__ = '1.0.0'

from .batcher import Batcher
from .store import Store, MemoryStore
