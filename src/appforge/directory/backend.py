import json
import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from pydantic import ValidationError

from .models import Infra
from ..io.fs import FileSystem
from ..io.path import AFPath
from ..exceptions import AFIOError, LookupFailureError

logger = logging.getLogger(__name__)


class Backend(ABC):
    """Directory backend: where infrastructure records live."""

    @abstractmethod
    def get_infra(self, infra_id: str) -> Optional[Infra]:
        """
        Return the record for infra_id, or None when none exists.

        Raises:
            LookupFailureError: the backend could not be read
        """
        pass

    @abstractmethod
    def put_infra(self, infra: Infra):
        """Store (or replace) the record for infra.name"""
        pass


class MemoryBackend(Backend):
    """Backend keeping records in a dict; used for tests and dry runs."""

    def __init__(self, records: Optional[Dict[str, Infra]] = None):
        self._records: Dict[str, Infra] = dict(records or {})
        self._lock = threading.Lock()

    def get_infra(self, infra_id: str) -> Optional[Infra]:
        with self._lock:
            return self._records.get(infra_id)

    def put_infra(self, infra: Infra):
        with self._lock:
            self._records[infra.name] = infra


class FileBackend(Backend):
    """
    Backend storing all records in one JSON document:

        {"infra": {"<name>": {"name": ..., "state": "ready", ...}}}
    """

    def __init__(self, fs: FileSystem, path: AFPath):
        self.fs = fs
        self.path = path

    def _load(self) -> Dict[str, Dict]:
        if not self.fs.exists(self.path):
            logger.debug(f"No directory file at {self.path}")
            return {}
        try:
            data = json.loads(self.fs.read_text(self.path))
        except (AFIOError, OSError) as e:
            raise LookupFailureError(f"Failed to read directory '{self.path}': {e}") from e
        except json.JSONDecodeError as e:
            raise LookupFailureError(f"Directory '{self.path}' is not valid JSON: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("infra", {}), dict):
            raise LookupFailureError(f"Directory '{self.path}' has an unexpected layout")
        return data.get("infra", {})

    def get_infra(self, infra_id: str) -> Optional[Infra]:
        raw = self._load().get(infra_id)
        if raw is None:
            return None
        try:
            return Infra.model_validate(raw)
        except ValidationError as e:
            raise LookupFailureError(f"Invalid record for infrastructure '{infra_id}': {e}") from e

    def put_infra(self, infra: Infra):
        records = self._load()
        records[infra.name] = infra.model_dump(mode="json")
        self.fs.write_text(self.path, json.dumps({"infra": records}, indent=2, sort_keys=True))
        logger.info(f"Stored infrastructure '{infra.name}' ({infra.state.value}) in {self.path}")
