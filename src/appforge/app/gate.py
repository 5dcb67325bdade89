import logging

from ..directory import Backend, Infra
from ..exceptions import PreconditionNotMetError

logger = logging.getLogger(__name__)

NOT_READY_MESSAGE = (
    "Infrastructure for this application hasn't been built yet.\n"
    "The build step requires this because the target infrastructure\n"
    "as well as its final properties can affect the build process.\n"
    "Please run the infra step to build the underlying infrastructure\n"
    "(check its state with `appf infra`), then run `appf build` again."
)


def check_ready(directory: Backend, infra_id: str) -> Infra:
    """
    Return the record of infra_id if it is ready.

    Raises:
        LookupFailureError: the directory could not be queried
        PreconditionNotMetError: no record, or the record is not ready
    """
    infra = directory.get_infra(infra_id)
    if infra is None:
        logger.debug(f"No directory record for infrastructure '{infra_id}'")
        raise PreconditionNotMetError(NOT_READY_MESSAGE)
    if not infra.ready:
        logger.debug(f"Infrastructure '{infra_id}' is {infra.state.value}, not ready")
        raise PreconditionNotMetError(
            f"{NOT_READY_MESSAGE}\n\nCurrent state of '{infra_id}': {infra.state.value}"
        )
    return infra
