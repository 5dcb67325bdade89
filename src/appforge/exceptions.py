class AppForgeError(Exception):
    """Base exception for all application-specific errors."""

    pass


# --- 1. Errors related to loading and parsing the Appfile ---
class ConfigurationError(AppForgeError):
    """Base class for errors encountered while finding, reading, or parsing an Appfile."""

    pass


class AppfileMissingError(ConfigurationError):
    """Raised when the Appfile cannot be found."""

    pass


class AppfileParsingError(ConfigurationError):
    """Raised when an Appfile is syntactically incorrect."""

    pass


class AppfileValidationError(ConfigurationError):
    """Raised when the Appfile fails structural validation (e.g., Pydantic)."""

    pass


# --- 2. Errors related to the logical validity and definitions within the Appfile ---
class DefinitionError(AppForgeError):
    """Base class for errors in the logical definition and references within the Appfile."""

    pass


class ReferenceNotFoundError(DefinitionError):
    """Raised when a reference points to a non-existent infrastructure or dependency."""

    pass


class CircularDependencyError(DefinitionError):
    """Raised when application dependencies form a loop."""

    pass


class UnknownAppTypeError(DefinitionError):
    """Raised when no driver is registered for an application type."""

    pass


# --- 3. Errors raised by application drivers during a lifecycle phase ---
class DriverError(AppForgeError):
    """Base class for errors that occur inside compile, build, dev or devdep."""

    pass


class AssetNotFoundError(DriverError):
    """Raised when a required template tree does not exist."""

    pass


class WriteFailureError(DriverError):
    """Raised when a materialized file cannot be written."""

    pass


class TemplateRenderError(DriverError):
    """Raised when a packaged template cannot be rendered with the given context."""

    pass


class PreconditionNotMetError(DriverError):
    """Raised when a phase requires a step the user has not run yet."""

    pass


class ToolInvocationError(DriverError):
    """Raised when the provisioning tool fails; carries its captured output."""

    def __init__(self, message: str, stdout: str = "", stderr: str = ""):
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(_with_output(message, stdout, stderr))


class EnvironmentFailureError(DriverError):
    """Raised when the development environment tool fails; carries its captured output."""

    def __init__(self, message: str, stdout: str = "", stderr: str = ""):
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(_with_output(message, stdout, stderr))


def _with_output(message: str, stdout: str, stderr: str) -> str:
    parts = [message]
    if stdout.strip():
        parts.append(f"stdout:\n{stdout.rstrip()}")
    if stderr.strip():
        parts.append(f"stderr:\n{stderr.rstrip()}")
    return "\n\n".join(parts)


# --- 4. Errors related to the infrastructure directory ---
class DirectoryError(AppForgeError):
    """Base class for directory (infrastructure registry) errors."""

    pass


class LookupFailureError(DirectoryError):
    """Raised when the directory backend cannot answer a lookup."""

    pass


# --- 5. Errors related to IO operations ---
class AFIOError(AppForgeError):
    """Base class for IO-related errors."""

    pass


class InvalidPathError(AFIOError):
    """Raised when a path is invalid."""

    pass


class UnsupportedFeatureError(AppForgeError):
    """Raised when a requested feature is not implemented."""

    pass


class ProtocolError(AFIOError, UnsupportedFeatureError):
    """Raised when an unsupported protocol is used."""

    pass


class ReadOnlyError(AFIOError):
    """Raised when a write operation is attempted on a read-only filesystem."""

    pass


class AFPathExistsError(AFIOError):
    """Raised when a file or directory already exists."""

    pass


class AFPathNotFoundError(AFIOError):
    """Raised when a file or directory is not found."""

    pass


class AFNotAFileError(AFIOError):
    """Raised when a file is expected, but a directory is found."""

    pass


class AFNotADirectoryError(AFIOError):
    """Raised when a directory is expected, but a file is found."""

    pass
