from typing import Tuple

from pydantic import BaseModel, ConfigDict

from ..io import AFPath


class CompileResult(BaseModel):
    """
        Output of Compile: where dependents find this application's
        dev dependency fragment.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dev_dep_fragment_path: AFPath


class DevDep(BaseModel):
    """
        Output of DevDep: files (relative to the dev dependency build
        directory) a dependent environment must copy in.
    """
    model_config = ConfigDict(frozen=True)

    files: Tuple[str, ...]
