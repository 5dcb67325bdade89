"""
appforge Core

`Core` runs one lifecycle phase for a root Appfile and its dependency
tree. It owns the output layout:

    <output_dir>/app            compiled root application
    <output_dir>/deps/<name>    compiled dependencies
    <output_dir>/cache/<name>   per-application cache (dev dependency manifests)

Dependencies are compiled before the root so their Vagrantfile fragments
can be handed to it, and their dev dependencies are built before the root
development environment starts.
"""

import logging
from typing import Dict, List, Optional, Tuple

from . import constants
from .app import App
from .config import Appfile
from .datacls import ApplicationContext, CompileResult, DevDep, InfraTuple
from .directory import Backend
from .io import AFPath, FileSystem, AppFileSystem
from .registry import AppRegistry, app_registry, initialize_registries
from .ui import Ui
from .exceptions import (
    AFIOError,
    AssetNotFoundError,
    CircularDependencyError,
    DefinitionError,
    PreconditionNotMetError,
)

logger = logging.getLogger(__name__)


class Core:
    """Orchestrates compile, build and dev for one root application."""

    def __init__(
        self,
        appfile: Appfile,
        output_dir: AFPath,
        directory: Backend,
        ui: Ui,
        fs: Optional[FileSystem] = None,
        registry: Optional[AppRegistry] = None,
    ):
        self.appfile = appfile
        self.output_dir = output_dir
        self.directory = directory
        self.ui = ui
        self.fs = fs if fs is not None else AppFileSystem()
        if registry is None:
            if not app_registry.registry:
                initialize_registries()
            registry = app_registry
        self.registry = registry

        self.app_dir = output_dir / constants.COMPILED_APP_SUBDIR
        self.deps_dir = output_dir / constants.COMPILED_DEPS_SUBDIR
        self.cache_root = output_dir / constants.CACHE_SUBDIR

        # root infrastructure is the deployment target of the whole tree
        infra = appfile.active_infrastructure()
        self.infra = InfraTuple(infra=infra.type, infra_flavor=infra.flavor)

        self._dependencies: Optional[List[Appfile]] = None

    # --------------------
    #
    # Dependency tree
    #
    # --------------------

    @property
    def dependencies(self) -> List[Appfile]:
        """All transitive dependencies, each listed after its own dependencies"""
        if self._dependencies is None:
            self._dependencies = self._load_dependencies()
        return self._dependencies

    def _load_dependencies(self) -> List[Appfile]:
        ordered: List[Appfile] = []
        loaded: Dict[AFPath, Appfile] = {}
        names: Dict[str, AFPath] = {self.appfile.name: self.appfile.path}

        def visit(appfile: Appfile, stack: Tuple[AFPath, ...]):
            for dep_path in appfile.dependency_paths():
                if dep_path in stack:
                    chain = " -> ".join(str(p) for p in (*stack, dep_path))
                    raise CircularDependencyError(f"Circular dependency detected: {chain}")
                if dep_path in loaded:
                    continue
                logger.debug(f"Loading dependency '{dep_path}' of '{appfile.name}'")
                dep = Appfile(str(dep_path), self.fs)
                if dep.name in names and names[dep.name] != dep_path:
                    raise DefinitionError(
                        f"Application name '{dep.name}' is used by both "
                        f"'{names[dep.name]}' and '{dep_path}'."
                    )
                names[dep.name] = dep_path
                loaded[dep_path] = dep
                visit(dep, (*stack, dep_path))
                ordered.append(dep)

        visit(self.appfile, (self.appfile.path,))
        logger.info(f"'{self.appfile.name}' has {len(ordered)} dependenc{'y' if len(ordered) == 1 else 'ies'}")
        return ordered

    # --------------------
    #
    # Contexts
    #
    # --------------------

    def _app(self, appfile: Appfile) -> App:
        return self.registry.app(appfile.type)

    def _context(self, appfile: Appfile, dir: AFPath, **kwargs) -> ApplicationContext:
        return ApplicationContext(
            appfile=appfile,
            infra=self.infra,
            cache_dir=self.cache_root / appfile.name,
            dir=dir,
            directory=self.directory,
            ui=self.ui,
            fs=self.fs,
            **kwargs,
        )

    def _dep_context(self, appfile: Appfile) -> ApplicationContext:
        return self._context(appfile, self.deps_dir / appfile.name)

    def _require_compiled(self):
        if not self.fs.is_dir(self.app_dir):
            raise PreconditionNotMetError(
                f"'{self.appfile.name}' has not been compiled yet. Run `appf compile` first."
            )

    # --------------------
    #
    # Phases
    #
    # --------------------

    def compile(self) -> CompileResult:
        """Compile every dependency, then the root with their fragments."""
        fragments = []
        for dep in self.dependencies:
            self.ui.header(f"Compiling dependency '{dep.name}'...")
            result = self._app(dep).compile(self._dep_context(dep))
            fragments.append(self._read_fragment(dep, result))

        self.ui.header(f"Compiling '{self.appfile.name}'...")
        ctx = self._context(self.appfile, self.app_dir, dev_dep_fragments=tuple(fragments))
        result = self._app(self.appfile).compile(ctx)
        self.ui.message(f"Compiled output written to {self.app_dir}")
        return result

    def _read_fragment(self, dep: Appfile, result: CompileResult) -> str:
        try:
            return self.fs.read_text(result.dev_dep_fragment_path)
        except (AFIOError, OSError) as e:
            raise AssetNotFoundError(
                f"Dependency '{dep.name}' did not produce its dev dependency fragment "
                f"at {result.dev_dep_fragment_path}"
            ) from e

    def build(self):
        self._require_compiled()
        self.ui.header(f"Building '{self.appfile.name}'...")
        self._app(self.appfile).build(self._context(self.appfile, self.app_dir))

    def dev(self, action: str = "", action_args: Tuple[str, ...] = ()):
        """
        Run a dev action. Creating the environment (the empty action) first
        builds the dev dependency of every dependency.
        """
        self._require_compiled()
        ctx = self._context(self.appfile, self.app_dir, action=action, action_args=tuple(action_args))

        if action == constants.DevAction.UP.value:
            for dep in self.dependencies:
                dep_ctx = self._dep_context(dep)
                dev_dep = self._app(dep).dev_dep(ctx, dep_ctx)
                self._check_dev_dep(dep_ctx, dev_dep)

        self._app(self.appfile).dev(ctx)

    def _check_dev_dep(self, ctx: ApplicationContext, dev_dep: DevDep):
        build_dir = ctx.dir / constants.DEVDEP_BUILD_SUBDIR
        missing = [f for f in dev_dep.files if not self.fs.exists(build_dir / f)]
        if missing:
            raise AssetNotFoundError(
                f"Dev dependency '{ctx.name}' is missing {missing} in {build_dir}"
            )
        logger.debug(f"Dev dependency '{ctx.name}' provides {list(dev_dep.files)}")
