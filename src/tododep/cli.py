"""
Command Line Interface for the todo dependency tracker.
"""

import click
from pathlib import Path
from .version import VERSION
from .commands import CommandLoop
from .data import TodoStore, resolve_default_path
from .logs import get_logger, setup_logging
from .recovery import FatalError

log = get_logger("cli")


@click.command()
@click.version_option(version=VERSION, prog_name="todo-dep-tracker")
@click.argument('path', required=False, type=click.Path(dir_okay=False, path_type=Path))
def main(path):
    """
    Hierarchical to-do list kept in a JSON file.

    PATH defaults to $XDG_DATA_HOME/todo-dep-tracker.json, falling back to
    ~/.local/share/todo-dep-tracker.json.
    """
    setup_logging()

    try:
        if path is None:
            path = resolve_default_path()

        with TodoStore(path) as store:
            CommandLoop(store).run()

    except FatalError as e:
        log.debug(f"Aborting session: {e!r}")
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    main()
