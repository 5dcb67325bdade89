import logging
from typing import override
from pathlib import PurePosixPath, PureWindowsPath, Path, PurePath
from urllib.parse import urlparse
from .. import constants
from ..exceptions import InvalidPathError


logger = logging.getLogger(__name__)


def add_protocol_checkers(cls):
    """
    Class Decorator to add is_<protocol> checkers for cls
    """

    def create_checker(protocol_name):
        def checker(self):
            return getattr(self, "protocol", None) == protocol_name

        checker.__name__ = f"is_{protocol_name}"
        return checker

    for protocol in constants.KNOWN_PROTOCOLS:
        setattr(cls, f"is_{protocol}", create_checker(protocol))
    return cls


@add_protocol_checkers
class AFPath(PurePosixPath):
    """
    A posix path that remembers which filesystem it belongs to.

    `resource:/apps/go/common` points into the packaged templates,
    `memory:/out` into an in-memory filesystem, anything else is a
    local path.
    """

    def __new__(cls, *args, **kwargs):
        protocol_kw = kwargs.pop("protocol", None)

        if not args:
            obj = super().__new__(cls)
            obj.protocol = protocol_kw or "file"
            obj._first_part = None
            return obj

        if protocol_kw is not None:
            obj = super().__new__(cls, *args, **kwargs)
            obj.protocol = protocol_kw
            first_part = args[0]
        else:
            path_str = str(args[0])
            parsed = urlparse(path_str)

            if parsed.scheme in constants.KNOWN_PROTOCOLS:
                obj_protocol = parsed.scheme
                path_part = parsed.netloc + parsed.path if parsed.netloc else parsed.path
            else:
                obj_protocol = "file"
                # help to convert windows path to posix path
                path_part = PurePath(path_str).as_posix()

            obj = super().__new__(cls, path_part, *(args[1:]), **kwargs)
            obj.protocol = obj_protocol
            first_part = path_part

        obj._first_part = first_part
        return obj

    def __init__(self, *args, **kwargs):
        kwargs.pop("protocol", None)
        if not args:
            super().__init__()
            return
        super().__init__(self._first_part, *(args[1:]), **kwargs)

    @override
    def with_segments(self, *pathsegments):
        # derived paths (parent, joinpath, /, relative_to) keep the protocol
        return type(self)(*pathsegments, protocol=self.protocol)

    @override
    def __str__(self) -> str:
        """
        Return the string representation of the path, reconstructing the full URI.
        """
        path_part = super().__str__()
        if self.protocol == "file":
            return path_part
        return f"{self.protocol}:{path_part}"

    def __path__(self) -> str:
        return super().__str__()

    @override
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self}')"

    @override
    def __eq__(self, other):
        if isinstance(other, AFPath):
            return self.protocol == other.protocol and self.__path__() == other.__path__()
        return NotImplemented

    @override
    def __hash__(self):
        return hash((self.protocol, self.__path__()))

    @override
    def is_absolute(self) -> bool:
        return is_path_absolute(self.__path__())

    def to_local(self) -> Path:
        """Return a pathlib.Path for local paths."""
        if self.protocol != "file":
            raise InvalidPathError(f"Path '{self}' is not a local path")
        return Path(self.__path__())


def is_path_absolute(path: str) -> bool:
    """
    Check if a path is absolute on either posix or windows.
    """
    try:
        if PurePosixPath(path).is_absolute():
            return True
        return PureWindowsPath(path).is_absolute()
    except (ValueError, TypeError) as e:
        raise InvalidPathError(f"Path is invalid: {path}") from e
