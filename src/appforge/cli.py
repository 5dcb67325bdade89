import click
import functools
import logging
import traceback

from .command import Meta, MetaCommand, command_ui, flag_set
from .directory import Infra, InfraState
from .ui import ClickUi
from .utils import setup_logger, parse_module_levels
from .exceptions import (
    AppForgeError,
    ConfigurationError,
    DefinitionError,
    DriverError,
    DirectoryError,
    UnsupportedFeatureError,
)
from . import __version__


def setup_logging(debug: bool, log_levels: str = None, log_file: str = None):
    """Setup logger with debug and module-level configuration"""
    setup_logger(debug=debug, module_levels=parse_module_levels(log_levels), log_file=log_file)


def handle_errors(func):
    """Decorator to handle common exceptions"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            _abort(f"Configuration error: {e}")
        except DefinitionError as e:
            _abort(f"Definition error: {e}")
        except DriverError as e:
            _abort(f"{e}")
        except UnsupportedFeatureError as e:
            _abort(f"Unsupported: {e}")
        except DirectoryError as e:
            _abort(f"Directory error: {e}")
        except AppForgeError as e:
            _abort(f"An unexpected application error occurred: {e}")
    return wrapper


def _abort(message: str):
    ctx = click.get_current_context()
    logging.error(message)
    if ctx.find_root().obj.get('debug'):
        traceback.print_exc()
    raise click.Abort()


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('-l', '--log-levels', help="Comma-separated per-module log levels (e.g., 'go=DEBUG,cache=INFO')")
@click.option('-f', '--log-file', help='Path to log file')
@click.version_option(version=__version__, prog_name='appforge')
@click.pass_context
def cli(ctx, debug, log_levels, log_file):
    """appforge: compile, build and develop applications described by an Appfile."""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    ctx.obj.setdefault('ui', ClickUi())
    setup_logging(debug, log_levels, log_file)


def _meta(ctx, appfile, output_dir) -> Meta:
    return Meta(command_ui(ctx), appfile=appfile, output_dir=output_dir)


@cli.command(cls=MetaCommand)
@flag_set()
@click.pass_context
@handle_errors
def compile(ctx, appfile, output_dir):
    """Compile the Appfile into build and dev environment files."""
    meta = _meta(ctx, appfile, output_dir)
    meta.core(meta.appfile()).compile()


@cli.command(cls=MetaCommand)
@flag_set()
@click.pass_context
@handle_errors
def build(ctx, appfile, output_dir):
    """Build deployable artifacts once the infrastructure is ready."""
    meta = _meta(ctx, appfile, output_dir)
    meta.core(meta.appfile()).build()


@cli.command(cls=MetaCommand)
@flag_set()
@click.argument('action', required=False, default="")
@click.argument('action_args', nargs=-1)
@click.pass_context
@handle_errors
def dev(ctx, appfile, output_dir, action, action_args):
    """
    Start the development environment.

    ACTION may be 'ssh' to enter it or 'destroy' to tear it down.
    """
    meta = _meta(ctx, appfile, output_dir)
    meta.core(meta.appfile()).dev(action, action_args)


@cli.command(cls=MetaCommand)
@flag_set()
@click.option(
    '--set-state',
    type=click.Choice([s.value for s in InfraState]),
    help='Record a new state for the active infrastructure (for provisioning tools)',
)
@click.pass_context
@handle_errors
def infra(ctx, appfile, output_dir, set_state):
    """Show the directory record of the active infrastructure."""
    meta = _meta(ctx, appfile, output_dir)
    af = meta.appfile()
    core = meta.core(af)
    active = af.active_infrastructure()

    if set_state:
        current = core.directory.get_infra(active.name)
        outputs = current.outputs if current is not None else {}
        core.directory.put_infra(Infra(
            name=active.name,
            type=active.type,
            flavor=active.flavor,
            state=InfraState(set_state),
            outputs=outputs,
        ))

    record = core.directory.get_infra(active.name)
    if record is None:
        click.echo(f"Infrastructure '{active.name}' ({active.type}/{active.flavor}): no record")
        return
    click.echo(f"Infrastructure '{record.name}' ({record.type}/{record.flavor}): {record.state.value}")
    for key, value in sorted(record.outputs.items()):
        click.echo(f"  {key} = {value}")
