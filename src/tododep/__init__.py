"""
Todo Dependency Tracker - a hierarchical to-do list kept in a single JSON file.

Tasks own ordered subtasks; the whole forest is loaded at startup, edited
through a line oriented prompt and written back when the session ends.
"""

from .version import VERSION, APP_SCHEMA_VERSION
from .models import TaskNode, TaskForest
from .data import TodoStore, decode, encode, resolve_default_path

__version__ = VERSION

__all__ = [
    "VERSION",
    "APP_SCHEMA_VERSION",
    "TaskNode",
    "TaskForest",
    "TodoStore",
    "decode",
    "encode",
    "resolve_default_path",
]
