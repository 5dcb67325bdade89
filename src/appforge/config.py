import hashlib
import logging
import posixpath
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from . import constants
from .io.path import AFPath
from .io.fs import FileSystem, AppFileSystem
from .exceptions import (
    AFIOError,
    AppfileMissingError,
    AppfileParsingError,
    AppfileValidationError,
    DefinitionError,
    ReferenceNotFoundError,
)

logger = logging.getLogger(__name__)


class DependencyModel(BaseModel):
    """
        Class Appfile-Validation Model describe `application.dependencies`
    """
    source: str


class ApplicationModel(BaseModel):
    """
        Class Appfile-Validation Model describe `application`
    """
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    dependencies: List[DependencyModel] = Field(default_factory=list)
    # driver-specific settings, we won't check
    model_config = ConfigDict(extra="allow")


class InfrastructureModel(BaseModel):
    """
        Class Appfile-Validation Model describe one `infrastructure` entry
    """
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    flavor: str = Field(min_length=1)


class ProjectModel(BaseModel):
    """
        Class Appfile-Validation Model describe `project`
    """
    name: str = Field(min_length=1)
    infrastructure: str = Field(min_length=1)


class AppfileModel(BaseModel):
    """
        Class Appfile-Validation Model describe top-level of an Appfile
    """
    application: ApplicationModel
    project: ProjectModel
    infrastructure: List[InfrastructureModel]

    @model_validator(mode='after')
    def validate_infrastructure_names(self) -> 'AppfileModel':
        """Ensure infrastructure names are unique"""
        seen = set()
        for infra in self.infrastructure:
            if infra.name in seen:
                raise DefinitionError(f"Infrastructure '{infra.name}' is defined more than once.")
            seen.add(infra.name)
        return self

    @model_validator(mode='after')
    def validate_project_infrastructure(self) -> 'AppfileModel':
        """Check the project points to a defined infrastructure"""
        names = {infra.name for infra in self.infrastructure}
        if self.project.infrastructure not in names:
            raise ReferenceNotFoundError(
                f"Project '{self.project.name}' uses infrastructure '{self.project.infrastructure}', "
                f"which is not defined. Defined: {sorted(names)}."
            )
        return self


class Appfile:
    """
    Loads and validates an Appfile using Pydantic models.
    It is the sole gatekeeper for application descriptors.
    """
    def __init__(self, path: str, fs: FileSystem = None):
        self.path = AFPath(path)
        self.fs = fs if fs is not None else AppFileSystem()
        logger.info(f"Loading Appfile from '{self.path}'...")
        self.raw = self._load_raw()
        data = self._parse(self.raw)

        logger.debug("Validating Appfile structure with Pydantic...")
        try:
            self.model = AppfileModel.model_validate(data)
        except ValidationError as e:
            raise AppfileValidationError(f"Appfile validation failed:\n{e}")
        logger.debug(f"Appfile validated: \n{self.model.model_dump_json(indent=2)}")

    def _load_raw(self) -> bytes:
        try:
            return self.fs.read_bytes(self.path)
        except (AFIOError, OSError) as e:
            raise AppfileMissingError(f"Appfile not found at: {self.path}") from e

    def _parse(self, raw: bytes) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise AppfileParsingError(f"Error parsing Appfile '{self.path}': {e}")
        if not isinstance(data, dict):
            raise AppfileParsingError("Appfile must be a YAML document containing a dictionary.")
        return data

    @property
    def application(self) -> ApplicationModel:
        return self.model.application

    @property
    def name(self) -> str:
        return self.model.application.name

    @property
    def type(self) -> str:
        return self.model.application.type

    @property
    def dir(self) -> AFPath:
        """Directory holding the Appfile; the application's working directory."""
        return self.path.parent

    @property
    def content_hash(self) -> str:
        return hashlib.sha256(self.raw).hexdigest()

    def active_infrastructure(self) -> InfrastructureModel:
        """The infrastructure entry the project deploys to."""
        wanted = self.model.project.infrastructure
        for infra in self.model.infrastructure:
            if infra.name == wanted:
                return infra
        # unreachable after validation
        raise ReferenceNotFoundError(f"Infrastructure '{wanted}' is not defined.")

    def dependency_paths(self) -> List[AFPath]:
        """Appfile paths of declared dependencies, resolved against this Appfile's directory."""
        paths = []
        for dep in self.application.dependencies:
            source = AFPath(dep.source)
            if not source.is_absolute():
                source = self.dir / dep.source
            # collapse "..", so each Appfile has exactly one path
            source = AFPath(posixpath.normpath(source.__path__()), protocol=source.protocol)
            if self.fs.is_dir(source):
                source = source / constants.DEFAULT_APPFILE
            paths.append(source)
        return paths

    def __repr__(self) -> str:
        return f"Appfile(path='{self.path}', name='{self.name}', type='{self.type}')"


def load_appfile(path: Optional[str], fs: FileSystem = None) -> Appfile:
    """
    Load the Appfile at path. A directory means `<dir>/Appfile`; no path
    means the current directory.
    """
    fs = fs if fs is not None else AppFileSystem()
    target = AFPath(path or ".")
    if not fs.exists(target):
        raise AppfileMissingError(f"Error checking Appfile path: '{target}' does not exist")
    if fs.is_dir(target):
        target = target / constants.DEFAULT_APPFILE
    return Appfile(str(target), fs)
