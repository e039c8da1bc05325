"""
TodoStore - owns the storage file for the length of one session.

The file is opened when the session starts, read and decoded once, and kept
open so the final save rewrites the same file in place. Leaving the session
always closes the handle but never saves; only an explicit ``save`` writes.
"""
import os
from pathlib import Path
from typing import IO, Mapping, Optional, Union

import click

from tododep.logs import get_logger
from tododep.models import TaskForest
from tododep.recovery import DecodeError, FatalError, PathResolutionError, StorageError
from .codec import decode, encode

log = get_logger("data.store")

DATA_FILENAME = "todo-dep-tracker.json"

def resolve_default_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Work out where the task list lives when no path was given.

    Follows the XDG base directory convention: ``$XDG_DATA_HOME`` when set,
    otherwise ``$HOME/.local/share``.

    Raises:
        PathResolutionError: If neither variable is available.
    """
    if environ is None:
        environ = os.environ

    data_home = environ.get("XDG_DATA_HOME")
    if not data_home:
        home = environ.get("HOME")
        if not home:
            error_msg = "Cannot resolve a storage path: neither XDG_DATA_HOME nor HOME is set"
            log.critical(error_msg)
            raise PathResolutionError(error_msg)
        data_home = Path(home) / ".local" / "share"

    return Path(data_home) / DATA_FILENAME

class TodoStore:
    """Session-scoped handle on the storage file."""

    def __init__(self, path: Union[Path, str]):
        self.path = Path(path)
        self.forest: Optional[TaskForest] = None
        self._file: Optional[IO[bytes]] = None

    def __enter__(self):
        """Context manager entry - open and load the file."""
        self.load()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - release the file without saving."""
        self.close()

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def _create(self) -> IO[bytes]:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            return open(self.path, "w+b")
        except OSError as e:
            error_msg = f"Failed to create {self.path}: {e}"
            log.critical(error_msg)
            raise StorageError(error_msg) from e

    def load(self) -> TaskForest:
        """
        Open the storage file and decode the forest it holds.

        A missing file starts an empty forest and creates the file straight
        away. Any other I/O problem, or a file that does not decode, is fatal.
        """
        click.echo(f"Using file {self.path}")

        try:
            self._file = open(self.path, "r+b")
        except FileNotFoundError:
            click.echo("File not found; creating empty list.")
            self._file = self._create()
            self.forest = TaskForest()
            log.info(f"Created empty task file: {self.path}")
            return self.forest
        except OSError as e:
            error_msg = f"Couldn't open {self.path}: {e}"
            log.critical(error_msg)
            raise StorageError(error_msg) from e

        try:
            contents = self._file.read()
        except OSError as e:
            self.close()
            error_msg = f"Couldn't read {self.path}: {e}"
            log.critical(error_msg)
            raise StorageError(error_msg) from e

        click.echo(f"Read {len(contents)} bytes")

        try:
            self.forest = decode(contents)
        except DecodeError as e:
            self.close()
            log.critical(f"Refusing to continue with {self.path}: {e}")
            raise

        log.info(f"Loaded {len(self.forest)} root tasks from {self.path}")
        return self.forest

    def save(self, forest: Optional[TaskForest] = None):
        """
        Rewrite the storage file with the given forest (default: the loaded one).

        The file is truncated and rewritten in place through the handle opened
        by ``load``. A crash part way through can leave the file short.
        """
        if forest is None:
            forest = self.forest
        if self._file is None or forest is None:
            raise StorageError(f"Cannot save {self.path}: store is not open")

        try:
            data = encode(forest).encode("utf-8")
        except (TypeError, ValueError) as e:
            error_msg = (f"Data serialization failed for {self.path}. "
                         f"In-memory data may be corrupt: {e}")
            log.critical(error_msg)
            raise FatalError(error_msg) from e

        try:
            self._file.truncate(0)
            self._file.seek(0)
            self._file.write(data)
            self._file.flush()
            os.fsync(self._file.fileno())
        except OSError as e:
            error_msg = f"I/O error saving {self.path}: {e}"
            log.critical(error_msg)
            raise StorageError(error_msg) from e

        log.debug(f"Wrote {len(data)} bytes to {self.path}")

    def close(self):
        """Flush and close the storage file; safe to call more than once."""
        if self._file is None:
            return
        handle, self._file = self._file, None
        try:
            handle.close()
        except OSError as e:
            error_msg = f"Failed to close {self.path}: {e}"
            log.error(error_msg)
            raise StorageError(error_msg) from e
