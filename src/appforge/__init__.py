"""
appforge

Pluggable application drivers for an infrastructure orchestration tool.
An Appfile describes an application and its target infrastructure; a
driver compiles it into build and development environment files, builds
artifacts with Packer once the infrastructure is ready, runs a Vagrant
development environment and packages itself as a dev dependency for
other applications.

Main modules:
- io: File system and path handling with multi-protocol support
- config: Appfile loading and validation
- directory: Infrastructure records and their backends
- app: Driver interface, template materializer, readiness gate, dev dependency cache
- bases: Concrete drivers (GoApp)
- helper: Packer and Vagrant wrappers
- core: Per-invocation orchestration across the dependency tree
- registry: Dynamic driver discovery
- command / cli: The `appf` command line

Quick start example:
```python
from appforge import Core, MemoryBackend, ClickUi, load_appfile

appfile = load_appfile("path/to/project")
core = Core(appfile, appfile.dir / ".appforge", MemoryBackend(), ClickUi())
core.compile()
```
"""

__version__ = "0.3.0"

from .app import App, TemplateData, check_ready
from .registry import AppRegistry, app_registry, initialize_registries
from .config import Appfile, AppfileModel, load_appfile
from .core import Core
from .datacls import ApplicationContext, InfraTuple, CompileResult, DevDep
from .directory import Infra, InfraState, Backend, MemoryBackend, FileBackend
from .ui import Ui, ClickUi, LineForwarder
from .io import AFPath, FileSystem, AppFileSystem, create_app_fs
from .exceptions import (
    AppForgeError,
    ConfigurationError,
    DefinitionError,
    DriverError,
    DirectoryError,
)

__all__ = [
    # Version
    '__version__',
    # Drivers
    'App',
    'TemplateData',
    'check_ready',
    # Registry
    'AppRegistry',
    'app_registry',
    'initialize_registries',
    # Config
    'Appfile',
    'AppfileModel',
    'load_appfile',
    # Core
    'Core',
    # Data classes
    'ApplicationContext',
    'InfraTuple',
    'CompileResult',
    'DevDep',
    # Directory
    'Infra',
    'InfraState',
    'Backend',
    'MemoryBackend',
    'FileBackend',
    # UI
    'Ui',
    'ClickUi',
    'LineForwarder',
    # IO
    'AFPath',
    'FileSystem',
    'AppFileSystem',
    'create_app_fs',
    # Exceptions
    'AppForgeError',
    'ConfigurationError',
    'DefinitionError',
    'DriverError',
    'DirectoryError',
]
