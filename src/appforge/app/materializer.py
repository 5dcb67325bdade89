import logging
from typing import Any, Dict

from jinja2 import Environment, StrictUndefined, TemplateError

from .. import constants
from ..io import AFPath, FileSystem
from ..exceptions import AFIOError, AssetNotFoundError, TemplateRenderError, WriteFailureError

logger = logging.getLogger(__name__)


class TemplateData:
    """
    Copies packaged asset trees into a build directory.

    Files whose name ends in `.tpl` are rendered with `context` and written
    without the suffix; everything else is copied byte for byte. Copies
    overwrite, so running again with the same context yields the same
    tree. Nothing is rolled back when a copy fails halfway.
    """

    def __init__(self, fs: FileSystem, root: AFPath, context: Dict[str, Any]):
        self.fs = fs
        self.root = root
        self.context = context
        self._env = Environment(
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def copy_dir(self, dst: AFPath, prefix: str, optional: bool = False) -> int:
        """
        Copy every file below `<root>/<prefix>` into dst.

        Args:
            dst: target directory
            prefix: asset tree name, e.g. 'common' or 'aws-simple'
            optional: a tree that does not exist is skipped instead of raising

        Returns:
            number of files written

        Raises:
            AssetNotFoundError: the tree does not exist and is not optional
            WriteFailureError: a file could not be written
        """
        src = self.root / prefix
        if not self.fs.is_dir(src):
            if optional and not self.fs.exists(src):
                logger.debug(f"No asset tree '{prefix}' under {self.root}, skipping")
                return 0
            raise AssetNotFoundError(f"Asset tree '{prefix}' not found under {self.root}")

        count = 0
        for file_path in self.fs.walk_files(src):
            rel = file_path.relative_to(src)
            self._copy_file(file_path, dst.joinpath(*rel.parts))
            count += 1
        logger.debug(f"Copied {count} file(s) from '{prefix}' to {dst}")
        return count

    def _copy_file(self, src: AFPath, dst: AFPath):
        content = self.fs.read_bytes(src)
        if dst.name.endswith(constants.TEMPLATE_SUFFIX):
            dst = dst.with_name(dst.name[:-len(constants.TEMPLATE_SUFFIX)])
            content = self._render(src, content.decode("utf-8")).encode("utf-8")
        try:
            self.fs.write_bytes(dst, content)
        except (AFIOError, OSError) as e:
            raise WriteFailureError(f"Failed to write '{dst}': {e}") from e
        logger.debug(f"[Materialize] {src} -> {dst}")

    def _render(self, src: AFPath, text: str) -> str:
        try:
            return self._env.from_string(text).render(**self.context)
        except TemplateError as e:
            raise TemplateRenderError(f"Failed to render template '{src}': {e}") from e
