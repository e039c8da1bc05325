"""
Interactive command loop.

Every iteration prints the help banner and the current forest, reads one line
and dispatches on its first character. Mistyped commands are reported and the
loop carries on; fatal errors propagate to the caller.
"""
from dataclasses import dataclass
from typing import Callable, Dict, IO, List, Optional, Tuple

import click

from .data.store import TodoStore
from .logs import get_logger
from .recovery import CommandError, EmptyCommandError, IndexParseError, UnknownCommandError

log = get_logger("commands")

BANNER = "To run any command, type the command symbol, followed by the target."

CommandHandler = Callable[['CommandLoop', str], None]

@dataclass
class Command:
    symbol: str
    usage: str
    help_text: str
    handler: CommandHandler

class CommandRegistry:
    """Single-character command table used by the loop and its help banner."""

    def __init__(self):
        self._commands: Dict[str, Command] = {}

    def register(self, symbol: str, usage: str, help_text: str):
        """Decorator registering a handler under its leading character."""
        if len(symbol) != 1:
            raise ValueError(f"Command symbol must be a single character: {symbol!r}")

        def decorator(handler: CommandHandler) -> CommandHandler:
            self._commands[symbol] = Command(symbol, usage, help_text, handler)
            return handler
        return decorator

    def get(self, symbol: str) -> Command:
        command = self._commands.get(symbol)
        if command is None:
            raise UnknownCommandError(symbol)
        return command

    def commands(self) -> List[Command]:
        return list(self._commands.values())

    def build_help(self) -> str:
        lines = [BANNER]
        for command in self._commands.values():
            lines.append(f"{command.usage}: {command.help_text}")
        return "\n".join(lines)

registry = CommandRegistry()

def parse_command(line: str) -> Tuple[str, str]:
    """
    Split a raw input line into its command symbol and trimmed argument.

    Only the line terminator is removed before the first character is taken,
    so a line starting with a space is an unknown command, not an empty one.
    """
    line = line.rstrip("\r\n")
    if not line:
        raise EmptyCommandError("No character provided.")
    return line[0], line[1:].strip()

def parse_index(argument: str, action: str) -> int:
    """Parse a root task position; ``action`` completes the failure message."""
    try:
        index = int(argument)
    except ValueError as e:
        raise IndexParseError(f"Could not parse int. Not {action}. {e}") from e
    if index < 0:
        raise IndexParseError(f"Could not parse int. Not {action}. {index} is negative")
    return index

class CommandLoop:
    """Reads commands from a text stream and applies them to the store's forest."""

    def __init__(self, store: TodoStore, stream: Optional[IO[str]] = None,
                 commands: CommandRegistry = registry):
        if store.forest is None:
            raise ValueError("CommandLoop needs a loaded store")
        self.store = store
        self.forest = store.forest
        self.stream = stream if stream is not None else click.get_text_stream("stdin")
        self.commands = commands
        self.running = False

    def show(self):
        click.echo(self.commands.build_help())
        click.echo(self.forest.render(), nl=False)

    def step(self, line: str):
        """Apply a single input line, reporting recoverable errors."""
        try:
            symbol, argument = parse_command(line)
            self.commands.get(symbol).handler(self, argument)
        except CommandError as e:
            log.info(f"Command {line.rstrip()!r} rejected: {e}")
            click.echo(str(e))

    def run(self):
        """Loop until quit, then save the forest once on the way out."""
        self.running = True
        while self.running:
            self.show()
            line = self.stream.readline()
            if line == "":
                log.info("End of input; saving and quitting")
                line = "q"
            self.step(line)
        self.store.save(self.forest)

@registry.register("+", "+<task>", "Create new top-level task")
def add_task(loop: CommandLoop, argument: str):
    loop.forest.add(argument)
    log.debug(f"Added task {argument!r} at {len(loop.forest) - 1}")

@registry.register("d", "d<n>", "Delete task <n> and all child tasks")
def delete_task(loop: CommandLoop, argument: str):
    index = parse_index(argument, "removed")
    node = loop.forest.delete(index)
    log.debug(f"Deleted task {index} ({node.title!r})")

@registry.register("c", "c<n>", "Mark task <n> and all child tasks as complete")
def complete_task(loop: CommandLoop, argument: str):
    index = parse_index(argument, "marked as complete")
    node = loop.forest.complete(index)
    log.debug(f"Completed task {index} ({node.title!r})")

# Root tasks have no parents, so only the task itself is reopened
@registry.register("i", "i<n>", "Mark task <n> and all parent tasks as incomplete")
def incomplete_task(loop: CommandLoop, argument: str):
    index = parse_index(argument, "marked as incomplete")
    node = loop.forest.mark_incomplete(index)
    log.debug(f"Reopened task {index} ({node.title!r})")

@registry.register("q", "q", "save and quit")
def quit_session(loop: CommandLoop, argument: str):
    loop.running = False

@registry.register("Q", "Q", "save without quitting")
def save_session(loop: CommandLoop, argument: str):
    loop.store.save(loop.forest)
    click.echo(f"Saved {loop.store.path}")
