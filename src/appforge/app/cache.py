import fnmatch
import hashlib
import json
import logging
from datetime import datetime
from typing import Iterable, Iterator, Optional

from pydantic import BaseModel, Field, ValidationError

from .. import constants
from ..datacls import ApplicationContext, DevDep
from ..io import AFPath
from ..exceptions import AFIOError

logger = logging.getLogger(__name__)


class DevDepManifest(BaseModel):
    """What the last successful dev dependency build produced, and for which inputs"""

    fingerprint: str
    dev_dep: DevDep
    created_at: datetime = Field(default_factory=datetime.now)


class DevDepCache:
    """
    Cache for dev dependency builds of one application.

    The manifest lives at `<cache_dir>/dev-dep.json`. A cached DevDep is
    reused only if the fingerprint still matches and every file it names
    is still present in the build directory.
    """

    def __init__(self, ctx: ApplicationContext, build_dir: AFPath, outputs: Iterable[str] = ()):
        self.ctx = ctx
        self.fs = ctx.fs
        self.build_dir = build_dir
        # files the build writes into build_dir; never part of the fingerprint
        self.outputs = set(outputs)
        self.manifest_path = ctx.cache_dir / constants.DEVDEP_MANIFEST_FILENAME

    def fingerprint(self) -> str:
        """
        Hash of everything that can change the build output: the driver
        kind, the infrastructure tuple, the Appfile, every file in the
        application's working directory and the compiled build scripts.
        """
        digest = hashlib.sha256()
        digest.update(f"type:{self.ctx.appfile.type}\n".encode())
        digest.update(f"infra:{self.ctx.infra.prefix}\n".encode())
        digest.update(f"appfile:{self.ctx.appfile.content_hash}\n".encode())

        working = self.ctx.appfile.dir
        for path in self._working_files(working):
            rel = "/".join(path.relative_to(working).parts)
            content_hash = hashlib.sha256(self.fs.read_bytes(path)).hexdigest()
            digest.update(f"file:{rel}:{content_hash}\n".encode())

        if self.fs.is_dir(self.build_dir):
            for path in self._working_files(self.build_dir):
                rel = "/".join(path.relative_to(self.build_dir).parts)
                if rel in self.outputs:
                    continue
                content_hash = hashlib.sha256(self.fs.read_bytes(path)).hexdigest()
                digest.update(f"build:{rel}:{content_hash}\n".encode())
        return digest.hexdigest()

    def _working_files(self, directory: AFPath) -> Iterator[AFPath]:
        for child in sorted(self.fs.listdir(directory), key=lambda p: p.name):
            if self.fs.is_dir(child):
                if child.name in constants.FINGERPRINT_IGNORE_DIRS or self._holds_output(child):
                    continue
                yield from self._working_files(child)
            elif not any(fnmatch.fnmatch(child.name, pat) for pat in constants.FINGERPRINT_IGNORE_PATTERNS):
                yield child

    def _holds_output(self, directory: AFPath) -> bool:
        """True if directory is, or contains, the compiled or cache directory"""
        for target in (self.ctx.dir, self.ctx.cache_dir):
            if target == directory or directory in target.parents:
                return True
        return False

    def load(self) -> Optional[DevDepManifest]:
        if not self.fs.exists(self.manifest_path):
            logger.debug(f"No dev dependency manifest at {self.manifest_path}")
            return None
        try:
            return DevDepManifest.model_validate(json.loads(self.fs.read_text(self.manifest_path)))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable dev dependency manifest {self.manifest_path}: {e}")
            return None

    def lookup(self, fingerprint: str) -> Optional[DevDep]:
        """Return the cached DevDep for fingerprint, or None on a miss."""
        manifest = self.load()
        if manifest is None:
            return None
        if manifest.fingerprint != fingerprint:
            logger.info(f"'{self.ctx.name}' changed since its last dev dependency build")
            return None
        missing = [f for f in manifest.dev_dep.files if not self.fs.exists(self.build_dir / f)]
        if missing:
            logger.info(f"Cached dev dependency for '{self.ctx.name}' is missing {missing}")
            return None
        logger.debug(f"Dev dependency cache hit for '{self.ctx.name}' ({fingerprint[:12]})")
        return manifest.dev_dep

    def store(self, fingerprint: str, dev_dep: DevDep):
        manifest = DevDepManifest(fingerprint=fingerprint, dev_dep=dev_dep)
        try:
            self.fs.write_text(self.manifest_path, manifest.model_dump_json(indent=2))
        except (AFIOError, OSError) as e:
            # the build itself succeeded; only the next run gets slower
            logger.error(f"Failed to save dev dependency manifest for '{self.ctx.name}': {e}")
            return
        logger.info(f"Saved dev dependency manifest for '{self.ctx.name}' to {self.manifest_path}")
