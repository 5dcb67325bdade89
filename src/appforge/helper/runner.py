import logging
import subprocess
from typing import Dict, NamedTuple, Optional, Sequence, Type

from ..io import AFPath
from ..ui import LineForwarder, Ui
from ..exceptions import DriverError

logger = logging.getLogger(__name__)


class ToolResult(NamedTuple):
    returncode: int
    stdout: str
    stderr: str


def run_tool(
    binary: str,
    args: Sequence[str],
    cwd: AFPath,
    ui: Ui,
    error_cls: Type[DriverError],
    env: Optional[Dict[str, str]] = None,
    interactive: bool = False,
) -> ToolResult:
    """
    Run an external tool in cwd and block until it exits.

    stdout lines go to ui.message and stderr lines to ui.error as they are
    produced; both are captured and attached to the error raised on a
    non-zero exit. Interactive runs inherit the terminal and capture
    nothing.

    Raises:
        error_cls: the tool could not be started or exited non-zero
    """
    cmd = [binary, *args]
    cmd_str = " ".join(cmd)
    workdir = str(cwd.to_local())
    logger.info(f"Running '{cmd_str}' in {workdir}")

    if interactive:
        try:
            returncode = subprocess.run(cmd, cwd=workdir, env=env).returncode
        except OSError as e:
            raise error_cls(f"Failed to run '{cmd_str}': {e}. Is {binary} installed and on PATH?") from e
        if returncode != 0:
            raise error_cls(f"'{cmd_str}' exited with status {returncode}")
        return ToolResult(returncode, "", "")

    stdout_lines = []
    with LineForwarder(ui.error, name=f"{binary}-stderr") as stderr_fwd:
        try:
            process = subprocess.Popen(
                cmd,
                cwd=workdir,
                env=env,
                stdout=subprocess.PIPE,
                stderr=stderr_fwd.writer,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            raise error_cls(f"Failed to run '{cmd_str}': {e}. Is {binary} installed and on PATH?") from e

        with process:
            for line in process.stdout:
                line = line.rstrip("\r\n")
                stdout_lines.append(line)
                ui.message(line)
        returncode = process.returncode

    stdout = "\n".join(stdout_lines)
    stderr = stderr_fwd.text
    if returncode != 0:
        raise error_cls(f"'{cmd_str}' exited with status {returncode}", stdout=stdout, stderr=stderr)
    logger.debug(f"'{cmd_str}' finished")
    return ToolResult(returncode, stdout, stderr)
