"""
Development environments through Vagrant.

`dev` brings up (or syncs) the interactive environment of an application
and runs its sub-actions; `build` runs a script inside a throwaway
environment, which is how dev dependencies are compiled regardless of
the host platform.
"""

import logging
import os
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

from .. import constants
from ..constants import DevAction
from ..datacls import ApplicationContext
from ..io import AFPath
from ..ui import Ui
from ..exceptions import EnvironmentFailureError, UnsupportedFeatureError
from .runner import ToolResult, run_tool

logger = logging.getLogger(__name__)


class DevOptions(BaseModel):
    """Options for `dev`; dir defaults to `<ctx.dir>/dev`"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dir: Optional[AFPath] = None
    instructions: str = ""


class BuildOptions(BaseModel):
    """Options for `build`: where the Vagrantfile is and which script to run inside"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dir: AFPath
    script: str


class Vagrant:
    """Runs vagrant in dir, keeping machine state in data_dir when given."""

    def __init__(self, dir: AFPath, ui: Ui, data_dir: Optional[AFPath] = None, binary: Optional[str] = None):
        self.dir = dir
        self.ui = ui
        self.data_dir = data_dir
        self.binary = binary or os.environ.get(constants.VAGRANT_BIN_ENV, constants.VAGRANT_BIN)

    def _env(self) -> Optional[Dict[str, str]]:
        if self.data_dir is None:
            return None
        return {**os.environ, "VAGRANT_DOTFILE_PATH": str(self.data_dir.to_local())}

    def execute(self, *args: str) -> ToolResult:
        return run_tool(self.binary, args, self.dir, self.ui, EnvironmentFailureError, env=self._env())

    def interactive(self, *args: str):
        run_tool(self.binary, args, self.dir, self.ui, EnvironmentFailureError, env=self._env(), interactive=True)


def dev(ctx: ApplicationContext, opts: DevOptions):
    """
    Run the dev action in ctx.action against the application's environment.

    Raises:
        EnvironmentFailureError: vagrant failed
        UnsupportedFeatureError: unknown action
    """
    vagrant = Vagrant(
        opts.dir or ctx.dir / constants.DEV_SUBDIR,
        ctx.ui,
        data_dir=ctx.cache_dir / "dev-vagrant",
    )

    try:
        action = DevAction(ctx.action)
    except ValueError:
        supported = ", ".join(repr(a.value) for a in DevAction)
        raise UnsupportedFeatureError(f"Unknown dev action '{ctx.action}'. Supported: {supported}")

    if action == DevAction.SSH:
        ctx.ui.header("Executing SSH. This may take a few seconds...")
        vagrant.interactive("ssh", *ctx.action_args)
        return

    if action == DevAction.DESTROY:
        ctx.ui.header("Destroying the local development environment...")
        vagrant.execute("destroy", "-f")
        ctx.ui.message("Development environment has been destroyed.")
        return

    ctx.ui.header("Creating local development environment with Vagrant if it doesn't exist...")
    ctx.ui.message("Raw Vagrant output will begin streaming in below. Appforge\n"
                   "does not create this output. It is mirrored directly from\n"
                   "Vagrant while the development environment is being created.\n")
    vagrant.execute("up")
    ctx.ui.header("Development environment successfully created!")
    ctx.ui.message(opts.instructions.strip())


def build(ctx: ApplicationContext, opts: BuildOptions):
    """
    Run opts.script inside a fresh environment defined in opts.dir. The
    environment is destroyed afterwards, also when the script fails.

    Raises:
        EnvironmentFailureError: vagrant or the script failed
    """
    vagrant = Vagrant(opts.dir, ctx.ui, data_dir=ctx.cache_dir / "dev-dep-vagrant")

    ctx.ui.header("Building with Vagrant...")
    try:
        vagrant.execute("up")
        vagrant.execute("ssh", "-c", f"bash {opts.script}")
    except EnvironmentFailureError:
        _destroy_after_failure(vagrant)
        raise
    vagrant.execute("destroy", "-f")
    logger.info(f"Vagrant build in {opts.dir} finished")


def _destroy_after_failure(vagrant: Vagrant):
    try:
        vagrant.execute("destroy", "-f")
    except EnvironmentFailureError as e:
        logger.error(f"Failed to destroy build environment in {vagrant.dir}: {e}")
