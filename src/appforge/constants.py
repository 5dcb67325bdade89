from enum import Enum

# --- Log and Debug ---
# Short aliases for module names to keep CLI/env concise
LOG_ALIAS_MAP = {
    "mat": "appforge.app.materializer",
    "tpl": "appforge.app.materializer",
    "gate": "appforge.app.gate",
    "cache": "appforge.app.cache",
    "cc": "appforge.app.cache",
    "go": "appforge.bases.apps.go",
    "packer": "appforge.helper.packer",
    "vagrant": "appforge.helper.vagrant",
    "exec": "appforge.helper.runner",
    "core": "appforge.core",
    "dir": "appforge.directory",
    "io": "appforge.io",
    "fs": "appforge.io.fs",
    "conf": "appforge.config",
    "rty": "appforge.registry",
    "ui": "appforge.ui",
}

# Top-level modules within appforge for auto-prefixing
KNOWN_TOP_MODULES = {
    "app",
    "bases",
    "command",
    "datacls",
    "directory",
    "helper",
    "io",
    "resources",
    "utils",
    "exceptions",
    "config",
    "core",
    "registry",
    "ui",
}

LOG_LEVELS_ENV = "APPFORGE_LOG_LEVELS"

# Known path protocols
KNOWN_PROTOCOLS = [
    "file",
    "memory",
    "resource",
]

# --- Filenames and Paths ---
DEFAULT_APPFILE = "Appfile"
DEFAULT_OUTPUT_DIR = ".appforge"
DIRECTORY_FILENAME = "directory.json"
DEVDEP_MANIFEST_FILENAME = "dev-dep.json"

# Layout below the output directory
COMPILED_APP_SUBDIR = "app"
COMPILED_DEPS_SUBDIR = "deps"
CACHE_SUBDIR = "cache"

# Layout below a compiled application directory
DEV_SUBDIR = "dev"
DEVDEP_BUILD_SUBDIR = "dev-dep/build"
DEVDEP_FRAGMENT_NAME = "Vagrantfile.fragment"

# --- Templates ---
TEMPLATE_SUFFIX = ".tpl"
COMMON_TEMPLATE_PREFIX = "common"

# --- External tools ---
PACKER_BIN = "packer"
PACKER_BIN_ENV = "APPFORGE_PACKER"
PACKER_VERIFY_ARGS = ("version",)
VAGRANT_BIN = "vagrant"
VAGRANT_BIN_ENV = "APPFORGE_VAGRANT"


class InfraState(str, Enum):
    """Lifecycle state of an infrastructure target."""
    PENDING = "pending"
    PROVISIONING = "provisioning"
    READY = "ready"
    FAILED = "failed"
    DESTROYED = "destroyed"


# Dev sub-actions accepted by the environment controller
class DevAction(str, Enum):
    UP = ""
    SSH = "ssh"
    DESTROY = "destroy"


# Files that never contribute to the dev dependency fingerprint
FINGERPRINT_IGNORE_PATTERNS = [
    "*.log",
    "*.tmp",
    "*.pid",
    "*.lock",
    "*.swp",
    "*.bak",
    "*~",
    "*.pyc",
    "*.pyo",
    ".DS_Store",
    "Thumbs.db",
]

# Directories skipped entirely while fingerprinting
FINGERPRINT_IGNORE_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".vagrant",
    "__pycache__",
    "node_modules",
    ".pytest_cache",
    ".tox",
    ".venv",
    "venv",
    DEFAULT_OUTPUT_DIR,
}
