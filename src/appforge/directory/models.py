from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from ..constants import InfraState


class Infra(BaseModel):
    """
        Record describing an infrastructure target and where it is in its
        lifecycle. Owned by whatever provisions infrastructure; drivers
        only read it.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    type: str = ""
    flavor: str = ""
    state: InfraState = InfraState.PENDING
    outputs: Dict[str, str] = Field(default_factory=dict)

    @property
    def ready(self) -> bool:
        return self.state == InfraState.READY
