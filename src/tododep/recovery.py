class TodoError(Exception):
    """Base exception for all todo tracker errors."""
    pass

class RecoverableError(TodoError):
    """An error that is reported to the user while the session carries on."""
    pass

class FatalError(TodoError):
    """An error that requires application termination."""
    pass

class CommandError(RecoverableError):
    """A command line could not be carried out; the forest is unchanged."""
    pass

class EmptyCommandError(CommandError):
    """The command line had no characters at all."""
    pass

class UnknownCommandError(CommandError):
    """The leading character does not name a registered command."""

    def __init__(self, symbol: str):
        super().__init__(f"Unknown command {symbol}")
        self.symbol = symbol

class IndexParseError(CommandError):
    """The command argument is not a non-negative integer."""
    pass

class IndexOutOfRangeError(CommandError):
    """The index does not name an existing root task."""

    def __init__(self, index: int, size: int):
        super().__init__("Out of range")
        self.index = index
        self.size = size

class PathResolutionError(FatalError):
    """No storage path could be derived from the environment."""
    pass

class StorageError(FatalError):
    """Reading or writing the storage file failed."""
    pass

class CorruptionError(FatalError):
    """Corrupted Data Error - from syntax errors in data formats, to just unknown data"""
    pass

class DecodeError(CorruptionError):
    """The persisted document is not a well formed task forest."""
    pass
