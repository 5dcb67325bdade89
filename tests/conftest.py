import os
import stat
import uuid
from pathlib import Path
from typing import List, Tuple

import pytest
import yaml

from appforge.ui import Ui
from appforge.io import AFPath


class RecordingUi(Ui):
    """Ui that keeps every call for later inspection."""

    def __init__(self):
        self.headers: List[str] = []
        self.messages: List[str] = []
        self.errors: List[str] = []

    def header(self, message: str):
        self.headers.append(message)

    def message(self, message: str):
        self.messages.append(message)

    def error(self, message: str):
        self.errors.append(message)


def appfile_data(name="web", type="go", dependencies=None, infra_type="aws", flavor="simple"):
    return {
        'application': {
            'name': name,
            'type': type,
            'dependencies': [{'source': d} for d in (dependencies or [])],
        },
        'project': {
            'name': f"{name}-project",
            'infrastructure': f"{name}-infra",
        },
        'infrastructure': [
            {'name': f"{name}-infra", 'type': infra_type, 'flavor': flavor},
        ],
    }


@pytest.fixture
def ui() -> RecordingUi:
    return RecordingUi()


@pytest.fixture
def write_appfile(tmp_path: Path):
    """Write an Appfile into tmp_path/<subdir> and return its path."""
    def _write(subdir: str = "web", **kwargs) -> Path:
        app_dir = tmp_path / subdir
        app_dir.mkdir(parents=True, exist_ok=True)
        data = appfile_data(**kwargs)
        appfile = app_dir / "Appfile"
        appfile.write_text(yaml.dump(data))
        return appfile
    return _write


@pytest.fixture
def mem_root() -> AFPath:
    """A fresh directory on the (process wide) in-memory filesystem."""
    return AFPath(f"memory:/{uuid.uuid4().hex}")


FAKE_PACKER = """#!/bin/sh
echo "packer|$PWD|$*" >> "$FAKE_TOOL_LOG"
if [ -n "$FAKE_PACKER_FAIL" ] && [ "$1" = "$FAKE_PACKER_FAIL" ]; then
  echo "packer $1 failed" >&2
  exit 1
fi
echo "packer $1 ok"
"""

FAKE_VAGRANT = """#!/bin/sh
echo "vagrant|$PWD|$*" >> "$FAKE_TOOL_LOG"
if [ -n "$FAKE_VAGRANT_FAIL" ] && [ "$1" = "$FAKE_VAGRANT_FAIL" ]; then
  echo "vagrant $1 failed" >&2
  exit 1
fi
if [ "$1" = "ssh" ] && [ "$2" = "-c" ]; then
  echo built > dev-dep-output
fi
echo "vagrant $1 ok"
"""


class FakeTools:
    """Fake packer/vagrant executables that log each invocation."""

    def __init__(self, root: Path):
        self.root = root
        self.log = root / "calls.log"
        self.packer = self._write("packer", FAKE_PACKER)
        self.vagrant = self._write("vagrant", FAKE_VAGRANT)

    def _write(self, name: str, script: str) -> Path:
        path = self.root / name
        path.write_text(script)
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    def calls(self, tool: str = None) -> List[Tuple[str, str, str]]:
        """(tool, cwd, args) for every invocation, in order"""
        if not self.log.exists():
            return []
        result = []
        for line in self.log.read_text().splitlines():
            name, cwd, args = line.split("|", 2)
            if tool is None or name == tool:
                result.append((name, os.path.realpath(cwd), args))
        return result


@pytest.fixture
def fake_tools(tmp_path: Path, monkeypatch) -> FakeTools:
    """Point appforge at fake packer/vagrant binaries."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    tools = FakeTools(bin_dir)
    monkeypatch.setenv("FAKE_TOOL_LOG", str(tools.log))
    monkeypatch.setenv("APPFORGE_PACKER", str(tools.packer))
    monkeypatch.setenv("APPFORGE_VAGRANT", str(tools.vagrant))
    monkeypatch.delenv("FAKE_PACKER_FAIL", raising=False)
    monkeypatch.delenv("FAKE_VAGRANT_FAIL", raising=False)
    return tools
