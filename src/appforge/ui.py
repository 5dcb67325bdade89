"""
User interaction sink and the line forwarder worker.

Drivers talk to the user only through a `Ui`: headers, free-form messages
and error lines. `LineForwarder` turns a writable stream (a CLI parser's
error output, a subprocess' stderr) into a sequence of `Ui.error` calls
made from a background thread.
"""

import logging
import os
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, TextIO

import click

logger = logging.getLogger(__name__)


class Ui(ABC):
    """Sink for progress and diagnostics. Never used for control flow."""

    @abstractmethod
    def header(self, message: str):
        pass

    @abstractmethod
    def message(self, message: str):
        pass

    @abstractmethod
    def error(self, message: str):
        pass


class ClickUi(Ui):
    """Terminal Ui. Calls may arrive from forwarder threads, so writes are serialized."""

    def __init__(self, color: Optional[bool] = None):
        self.color = color
        self._lock = threading.Lock()

    def header(self, message: str):
        with self._lock:
            click.secho(f"==> {message}", bold=True, color=self.color)

    def message(self, message: str):
        with self._lock:
            click.echo(message, color=self.color)

    def error(self, message: str):
        with self._lock:
            click.secho(message, fg="red", err=True, color=self.color)


class LineForwarder:
    """
    Pipe + line scanner + background thread.

    While the forwarder is open, everything written to `writer` (or to its
    file descriptor, e.g. by a child process) is split into lines and each
    completed line is handed to `sink` on the worker thread. Closing the
    forwarder closes the write side, which ends the scan; `close` then
    joins the worker so every line has been delivered when it returns.

    Usage:
        with LineForwarder(ui.error) as fwd:
            parser.print_usage(fwd.writer)
    """

    def __init__(self, sink: Callable[[str], None], name: str = "line-forwarder"):
        self.sink = sink
        self.name = name
        self.lines: List[str] = []
        self.writer: Optional[TextIO] = None
        self._reader: Optional[TextIO] = None
        self._thread: Optional[threading.Thread] = None

    def __enter__(self) -> "LineForwarder":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def start(self):
        if self._thread is not None:
            raise RuntimeError(f"{self.name} already started")
        read_fd, write_fd = os.pipe()
        self._reader = os.fdopen(read_fd, "r", encoding="utf-8", errors="replace")
        self.writer = os.fdopen(write_fd, "w", encoding="utf-8", buffering=1)
        self._thread = threading.Thread(target=self._pump, name=self.name, daemon=True)
        self._thread.start()
        logger.debug(f"[{self.name}] started")

    def fileno(self) -> int:
        return self.writer.fileno()

    def _pump(self):
        with self._reader:
            for line in self._reader:
                line = line.rstrip("\r\n")
                self.lines.append(line)
                try:
                    self.sink(line)
                except Exception:
                    # keep draining so the writer never blocks on a full pipe
                    logger.exception(f"[{self.name}] sink failed for line: {line!r}")

    def close(self):
        """Close the write side and wait until every line was delivered. Idempotent."""
        if self.writer is not None and not self.writer.closed:
            self.writer.close()
        if self._thread is not None and self._thread.is_alive():
            self._thread.join()
            logger.debug(f"[{self.name}] drained {len(self.lines)} line(s)")

    @property
    def text(self) -> str:
        return "\n".join(self.lines)
