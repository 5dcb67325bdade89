import logging
import os
from typing import Optional

from .. import constants
from ..io import AFPath
from ..ui import Ui
from ..exceptions import ToolInvocationError
from .runner import ToolResult, run_tool

logger = logging.getLogger(__name__)


class Packer:
    """
    Runs Packer against a compiled build directory.

    Every build starts with `packer version` so that a missing or broken
    install fails before any real work begins.
    """

    def __init__(self, dir: AFPath, ui: Ui, binary: Optional[str] = None):
        self.dir = dir
        self.ui = ui
        self.binary = binary or os.environ.get(constants.PACKER_BIN_ENV, constants.PACKER_BIN)

    def execute(self, *args: str) -> ToolResult:
        """Run one packer command in self.dir."""
        return run_tool(self.binary, args, self.dir, self.ui, ToolInvocationError)

    def verify(self) -> ToolResult:
        result = self.execute(*constants.PACKER_VERIFY_ARGS)
        logger.debug(f"Packer install verified: {result.stdout.strip()}")
        return result

    def run_build(self, *tool_args: str):
        """
        Verify the install, then run tool_args (if any).

        Raises:
            ToolInvocationError: either command failed; carries its output
        """
        self.verify()
        if tool_args:
            self.execute(*tool_args)
