"""
appforge IO Module

- AFPath: posix path carrying a protocol (file, memory, resource)
- FileSystem: Abstract file system interface
- AppFileSystem: Multi-protocol file system dispatcher
- DiskFileSystem / MemoryFileSystem: fsspec-backed file systems
- ResourceFileSystem: Read-only access to packaged templates

Usage:
    from appforge.io import AFPath, create_app_fs

    fs = create_app_fs()
    content = fs.read_text(AFPath("resource:/apps/go/common/dev/Vagrantfile.tpl"))
"""

from .path import AFPath, is_path_absolute
from .fs import (
    FileSystem,
    AppFileSystem,
    DiskFileSystem,
    MemoryFileSystem,
    ResourceFileSystem,
    create_app_fs,
)

__all__ = [
    'AFPath',
    'is_path_absolute',
    'FileSystem',
    'AppFileSystem',
    'DiskFileSystem',
    'MemoryFileSystem',
    'ResourceFileSystem',
    'create_app_fs',
]
