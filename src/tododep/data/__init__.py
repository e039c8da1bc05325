"""
Data management submodule: persisted document format and the session store.
"""

from .codec import decode, encode, TASK_FOREST_SCHEMA
from .store import TodoStore, resolve_default_path, DATA_FILENAME

__all__ = [
    'decode',
    'encode',
    'TASK_FOREST_SCHEMA',
    'TodoStore',
    'resolve_default_path',
    'DATA_FILENAME',
]
