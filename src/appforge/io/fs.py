from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, override
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import PurePosixPath
import functools
import logging

import fsspec

from .path import AFPath
from ..exceptions import (
    ProtocolError,
    ReadOnlyError,
    AFPathExistsError,
    AFPathNotFoundError,
    AFNotAFileError,
    AFNotADirectoryError,
)

logger = logging.getLogger(__name__)


def wrap_io_error(func):
    """Decorator to wrap IO errors into appforge exceptions."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FileExistsError as e:
            raise AFPathExistsError(e) from e
        except FileNotFoundError as e:
            raise AFPathNotFoundError(e) from e
        except IsADirectoryError as e:
            raise AFNotAFileError(e) from e
        except NotADirectoryError as e:
            raise AFNotADirectoryError(e) from e

    return wrapper

# --------------------
#
# Abstract FileSystem
#
# --------------------

class FileSystem(ABC):
    """appforge File System Abstract Base Class"""

    @abstractmethod
    def read_text(self, path: AFPath) -> str:
        """Read text from a file"""
        pass

    @abstractmethod
    def read_bytes(self, path: AFPath) -> bytes:
        """Read bytes from a file"""
        pass

    @abstractmethod
    def write_text(self, path: AFPath, content: str):
        """Write text to a file, creating parent directories"""
        pass

    @abstractmethod
    def write_bytes(self, path: AFPath, content: bytes):
        """Write bytes to a file, creating parent directories"""
        pass

    @abstractmethod
    def exists(self, path: AFPath) -> bool:
        """Check if a path exists"""
        pass

    @abstractmethod
    def is_dir(self, path: AFPath) -> bool:
        """Check if a path is a directory"""
        pass

    @abstractmethod
    def is_file(self, path: AFPath) -> bool:
        """Check if a path is a file"""
        pass

    @abstractmethod
    def mkdir(self, path: AFPath, parents: bool = False, exist_ok: bool = False):
        """Create a directory"""
        pass

    @abstractmethod
    def listdir(self, path: AFPath) -> List[AFPath]:
        """List directory contents"""
        pass

    def walk_files(self, path: AFPath) -> Iterator[AFPath]:
        """Yield every file below path, depth first, in sorted order"""
        for child in sorted(self.listdir(path), key=lambda p: p.name):
            if self.is_dir(child):
                yield from self.walk_files(child)
            else:
                yield child

# --------------------
#
# Application FileSystem
#
# --------------------

class AppFileSystem(FileSystem):
    """
        Dispatches every call to the handler registered for the
        path's protocol (file, memory, resource).
    """

    def __init__(self):
        self._handlers: Dict[str, FileSystem] = {}
        self.register_handler("file", DiskFileSystem())
        self.register_handler("memory", MemoryFileSystem())
        self.register_handler("resource", ResourceFileSystem())

    def register_handler(self, protocol: str, handler: FileSystem):
        """Register a file system handler for a specific protocol."""
        self._handlers[protocol] = handler

    def _get_handler(self, path: AFPath) -> FileSystem:
        handler = self._handlers.get(path.protocol)
        if not handler:
            raise ProtocolError(
                f"No filesystem handler registered for protocol: '{path.protocol}'"
            )
        return handler

    @override
    @wrap_io_error
    def read_text(self, path: AFPath) -> str:
        return self._get_handler(path).read_text(path)

    @override
    @wrap_io_error
    def read_bytes(self, path: AFPath) -> bytes:
        return self._get_handler(path).read_bytes(path)

    @override
    @wrap_io_error
    def write_text(self, path: AFPath, content: str):
        return self._get_handler(path).write_text(path, content)

    @override
    @wrap_io_error
    def write_bytes(self, path: AFPath, content: bytes):
        return self._get_handler(path).write_bytes(path, content)

    @override
    def exists(self, path: AFPath) -> bool:
        return self._get_handler(path).exists(path)

    @override
    def is_dir(self, path: AFPath) -> bool:
        return self._get_handler(path).is_dir(path)

    @override
    def is_file(self, path: AFPath) -> bool:
        return self._get_handler(path).is_file(path)

    @override
    @wrap_io_error
    def mkdir(self, path: AFPath, parents: bool = False, exist_ok: bool = False):
        return self._get_handler(path).mkdir(path, parents=parents, exist_ok=exist_ok)

    @override
    @wrap_io_error
    def listdir(self, path: AFPath) -> List[AFPath]:
        return self._get_handler(path).listdir(path)

# --------------------
#
# fsspec FileSystems
#
# --------------------

class FsspecFileSystem(FileSystem):
    """fsspec-based File System"""

    def __init__(self, protocol="file"):
        self.fs = fsspec.filesystem(protocol)
        self.name = f"{protocol}FS"
        self.protocol = protocol

    def path2str(self, path: AFPath) -> str:
        return path.__path__()

    @override
    def read_text(self, path: AFPath, encoding: str = "utf-8") -> str:
        logger.debug(f"[{self.name}] Reading from: {path}")
        with self.fs.open(self.path2str(path), "r", encoding=encoding) as f:
            return f.read()

    @override
    def read_bytes(self, path: AFPath) -> bytes:
        logger.debug(f"[{self.name}] Reading bytes from: {path}")
        with self.fs.open(self.path2str(path), "rb") as f:
            return f.read()

    @override
    def write_text(self, path: AFPath, content: str, encoding: str = "utf-8"):
        logger.debug(f"[{self.name}] Writing to: {path}")
        self.fs.mkdirs(self.path2str(path.parent), exist_ok=True)
        with self.fs.open(self.path2str(path), "w", encoding=encoding) as f:
            f.write(content)

    @override
    def write_bytes(self, path: AFPath, content: bytes):
        logger.debug(f"[{self.name}] Writing bytes to: {path}")
        self.fs.mkdirs(self.path2str(path.parent), exist_ok=True)
        with self.fs.open(self.path2str(path), "wb") as f:
            f.write(content)

    @override
    def exists(self, path: AFPath) -> bool:
        return self.fs.exists(self.path2str(path))

    @override
    def is_dir(self, path: AFPath) -> bool:
        return self.fs.isdir(self.path2str(path))

    @override
    def is_file(self, path: AFPath) -> bool:
        return self.fs.isfile(self.path2str(path))

    @override
    def mkdir(self, path: AFPath, parents: bool = False, exist_ok: bool = False):
        self.fs.mkdirs(self.path2str(path), exist_ok=exist_ok)

    @override
    def listdir(self, path: AFPath) -> List[AFPath]:
        return [path / PurePosixPath(p).name for p in self.fs.ls(self.path2str(path), detail=False)]


class DiskFileSystem(FsspecFileSystem):
    """Local disk file system using fsspec"""

    def __init__(self):
        super().__init__(protocol="file")


class MemoryFileSystem(FsspecFileSystem):
    """In-memory file system using fsspec"""

    def __init__(self):
        super().__init__(protocol="memory")

# --------------------
#
# `resource`-protocol FileSystem
#
# --------------------

class ResourceFileSystem(FileSystem):
    """Read-only view of the templates packaged in appforge.resources"""

    package = "appforge.resources"

    def _traversable(self, path: AFPath) -> Traversable:
        if path.protocol != "resource":
            raise ProtocolError(f"Only resource protocol path is supported, got {path.protocol}")
        traversable = resources.files(self.package)
        for part in path.parts:
            if part == "/":
                continue
            traversable = traversable.joinpath(part)
        return traversable

    @override
    def read_text(self, path: AFPath, encoding: str = "utf-8") -> str:
        logger.debug(f"[ResourceFS] Reading from resource: {path}")
        return self._traversable(path).read_text(encoding=encoding)

    @override
    def read_bytes(self, path: AFPath) -> bytes:
        logger.debug(f"[ResourceFS] Reading bytes from resource: {path}")
        return self._traversable(path).read_bytes()

    @override
    def exists(self, path: AFPath) -> bool:
        t = self._traversable(path)
        return t.is_file() or t.is_dir()

    @override
    def is_dir(self, path: AFPath) -> bool:
        return self._traversable(path).is_dir()

    @override
    def is_file(self, path: AFPath) -> bool:
        return self._traversable(path).is_file()

    @override
    def listdir(self, path: AFPath) -> List[AFPath]:
        return [path / item.name for item in self._traversable(path).iterdir()]

    def _raise_read_only(self, path: AFPath):
        raise ReadOnlyError(f"Can not write to resource: {path}")

    @override
    def write_text(self, path: AFPath, content: str, encoding: str = "utf-8"):
        self._raise_read_only(path)

    @override
    def write_bytes(self, path: AFPath, content: bytes):
        self._raise_read_only(path)

    @override
    def mkdir(self, path: AFPath, parents: bool = False, exist_ok: bool = False):
        self._raise_read_only(path)


def create_app_fs() -> AppFileSystem:
    """Create an AppFileSystem with the default protocol handlers."""
    return AppFileSystem()
