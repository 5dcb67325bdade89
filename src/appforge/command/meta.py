"""
Options shared by every appf command.

`Meta` turns the `--appfile` / `--output` flags into a loaded Appfile and a
`Core`; `flag_set` adds those flags to a command, and `MetaCommand` routes
flag parsing errors through the Ui instead of straight to the terminal.
"""

import logging
from enum import Flag, auto
from pathlib import Path
from typing import Optional

import click

from .. import constants
from ..config import Appfile, load_appfile
from ..core import Core
from ..directory import Backend, FileBackend
from ..io import AFPath, FileSystem, AppFileSystem
from ..ui import ClickUi, LineForwarder, Ui

logger = logging.getLogger(__name__)


class FlagSetFlags(Flag):
    """Which shared flags a command accepts"""
    NONE = 0
    APPFILE = auto()
    OUTPUT_DIR = auto()


def flag_set(flags: FlagSetFlags = FlagSetFlags.APPFILE | FlagSetFlags.OUTPUT_DIR):
    """Decorator adding the shared flags selected by flags to a click command."""

    def decorator(f):
        if FlagSetFlags.OUTPUT_DIR in flags:
            f = click.option(
                '--output', 'output_dir',
                help=f"Output directory, relative to the Appfile (default: {constants.DEFAULT_OUTPUT_DIR})",
            )(f)
        if FlagSetFlags.APPFILE in flags:
            f = click.option(
                '--appfile',
                help="Appfile, or directory containing one (default: current directory)",
            )(f)
        return f

    return decorator


def command_ui(ctx: click.Context) -> Ui:
    """The Ui stored on the root context, or a terminal Ui if there is none"""
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and obj.get('ui') is not None:
        return obj['ui']
    return ClickUi()


class MetaCommand(click.Command):
    """
    click command whose usage errors are written through a LineForwarder,
    so they reach the user as `Ui.error` lines like every other error.
    """

    def parse_args(self, ctx: click.Context, args):
        ui = command_ui(ctx)
        with LineForwarder(ui.error, name=f"{self.name}-flags") as fwd:
            try:
                return super().parse_args(ctx, args)
            except click.UsageError as e:
                e.show(file=fwd.writer)
                # already reported; only the exit status is left
                raise click.exceptions.Exit(e.exit_code)


class Meta:
    """Per-invocation options available on all or most commands."""

    def __init__(
        self,
        ui: Ui,
        appfile: Optional[str] = None,
        output_dir: Optional[str] = None,
        directory: Optional[Backend] = None,
        fs: Optional[FileSystem] = None,
    ):
        self.ui = ui
        self.flag_appfile = appfile
        self.flag_output_dir = output_dir
        self.directory = directory
        self.fs = fs if fs is not None else AppFileSystem()

    def appfile(self) -> Appfile:
        """
        Load the Appfile named by --appfile (a directory means
        `<dir>/Appfile`, no flag means the current directory).

        Raises:
            AppfileMissingError, AppfileParsingError, AppfileValidationError
        """
        path = AFPath(self.flag_appfile or ".")
        if path.protocol == "file" and not path.is_absolute():
            # compiled files reference the working directory, keep it absolute
            path = AFPath(Path(path.__path__()).resolve())
        return load_appfile(str(path), self.fs)

    def output_dir(self, appfile: Appfile) -> AFPath:
        output = self.flag_output_dir or constants.DEFAULT_OUTPUT_DIR
        if AFPath(output).is_absolute():
            return AFPath(output)
        return appfile.dir / output

    def core(self, appfile: Appfile) -> Core:
        """Core for appfile; its output directory is resolved against the Appfile's directory."""
        output_dir = self.output_dir(appfile)
        directory = self.directory
        if directory is None:
            directory = FileBackend(self.fs, output_dir / constants.DIRECTORY_FILENAME)
        logger.debug(f"Output directory for '{appfile.name}': {output_dir}")
        return Core(appfile, output_dir, directory, self.ui, fs=self.fs)
