"""
appforge Application Context

`ApplicationContext` holds everything a driver may look at during one
lifecycle call. The caller builds it once per invocation; drivers never
mutate it.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..config import Appfile
from ..directory import Backend
from ..io import AFPath, FileSystem, AppFileSystem
from ..ui import Ui


class InfraTuple(BaseModel):
    """(infrastructure type, infrastructure flavor) of a deployment target"""
    model_config = ConfigDict(frozen=True)

    infra: str
    infra_flavor: str

    @property
    def prefix(self) -> str:
        """Name of the flavor-specific template tree, e.g. 'aws-simple'"""
        return f"{self.infra}-{self.infra_flavor}"


class ApplicationContext(BaseModel):
    """
    Holds the shared, immutable state of one driver invocation.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    appfile: Appfile
    infra: InfraTuple
    cache_dir: AFPath
    dir: AFPath
    directory: Backend
    ui: Ui

    # contents of Vagrantfile fragments contributed by dependencies
    dev_dep_fragments: Tuple[str, ...] = ()

    # `dev` sub-action ("", "ssh", "destroy") and its arguments
    action: str = ""
    action_args: Tuple[str, ...] = ()

    fs: FileSystem = Field(default_factory=AppFileSystem)

    @property
    def name(self) -> str:
        return self.appfile.name
