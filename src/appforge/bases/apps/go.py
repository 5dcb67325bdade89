import logging
from typing import override

from ... import constants
from ...app import App, DevDepCache, TemplateData, check_ready
from ...datacls import ApplicationContext, CompileResult, DevDep
from ...io import AFPath
from ...helper import BuildOptions, DevOptions, Packer
from ...helper import vagrant
from ...exceptions import PreconditionNotMetError

logger = logging.getLogger(__name__)

DEV_INSTRUCTIONS = """
A development environment has been created for writing a generic Go-based
application. For this development environment, Go is pre-installed. To
work on your project, edit files locally on your own machine. The file changes
will be synced to the development environment.

When you're ready to build your project, run 'appf dev ssh' to enter
the development environment. You'll be placed directly into the working
directory where you can run 'go get' and 'go build' as you normally would.
The GOPATH is already completely setup.
"""

DEV_DEP_MESSAGE = (
    "To ensure cross-platform compatibility, we'll use Vagrant to\n"
    "build this application. This is slow, and in a lot of cases we\n"
    "can do something faster. Future versions of appforge will detect and\n"
    "do this. As long as the application doesn't change, appforge will\n"
    "cache the results of this build.\n"
)

# packaged asset trees for this driver
ASSET_ROOT = AFPath("resource:/apps/go")

# file the dev dependency build script leaves in the build directory
DEV_DEP_OUTPUT = "dev-dep-output"
DEV_DEP_SCRIPT = "/appforge/build.sh"

# packer template produced by flavors that know how to build for their infra
PACKER_TEMPLATE = "build/template.json"


class GoApp(App):
    """
    Driver for plain Go applications.

    Compile lays out a Vagrant dev environment (plus a Packer template for
    flavors that ship one), Build hands the compiled directory to Packer
    once the infrastructure is ready, and DevDep cross-compiles the
    application inside a throwaway VM so dependents can embed the binary.
    """

    @override
    def compile(self, ctx: ApplicationContext) -> CompileResult:
        data = TemplateData(ctx.fs, ASSET_ROOT, {
            "name": ctx.appfile.name,
            "dev_fragments": list(ctx.dev_dep_fragments),
            "path": {
                "cache": str(ctx.cache_dir),
                "compiled": str(ctx.dir),
                "working": str(ctx.appfile.dir),
            },
        })

        data.copy_dir(ctx.dir, constants.COMMON_TEMPLATE_PREFIX)
        # not every infra/flavor pair needs extra files
        data.copy_dir(ctx.dir, ctx.infra.prefix, optional=True)
        logger.info(f"Compiled '{ctx.name}' for {ctx.infra.prefix} into {ctx.dir}")

        return CompileResult(
            dev_dep_fragment_path=ctx.dir / constants.DEVDEP_BUILD_SUBDIR / constants.DEVDEP_FRAGMENT_NAME,
        )

    @override
    def build(self, ctx: ApplicationContext):
        infra_id = ctx.appfile.active_infrastructure().name
        infra = check_ready(ctx.directory, infra_id)

        ctx.ui.message(repr(infra))
        logger.debug(f"Infrastructure '{infra_id}' is ready: {infra.model_dump()}")

        args = ()
        # decided by the flavor, a template left over from another flavor's compile is ignored
        if ctx.fs.exists(ASSET_ROOT / ctx.infra.prefix / f"{PACKER_TEMPLATE}{constants.TEMPLATE_SUFFIX}"):
            template = ctx.dir / PACKER_TEMPLATE
            if not ctx.fs.exists(template):
                raise PreconditionNotMetError(
                    f"Packer template {template} is missing. Run `appf compile` first."
                )
            args = ("build", PACKER_TEMPLATE)
        else:
            logger.info(f"Flavor {ctx.infra.prefix} has no Packer template, only verifying Packer")

        Packer(ctx.dir, ctx.ui).run_build(*args)

    @override
    def dev(self, ctx: ApplicationContext):
        vagrant.dev(ctx, DevOptions(instructions=DEV_INSTRUCTIONS.strip()))

    @override
    def dev_dep(self, dst: ApplicationContext, src: ApplicationContext) -> DevDep:
        src.ui.header(f"Building the dev dependency for '{src.name}'")
        src.ui.message(DEV_DEP_MESSAGE)

        build_dir = src.dir / constants.DEVDEP_BUILD_SUBDIR
        if not src.fs.is_dir(build_dir):
            raise PreconditionNotMetError(
                f"'{src.name}' has not been compiled yet ({build_dir} is missing). Run `appf compile` first."
            )
        cache = DevDepCache(src, build_dir, outputs=(DEV_DEP_OUTPUT,))
        fingerprint = cache.fingerprint()
        cached = cache.lookup(fingerprint)
        if cached is not None:
            src.ui.message(f"Using cached dev dependency for '{src.name}'.")
            return cached

        vagrant.build(src, BuildOptions(dir=build_dir, script=DEV_DEP_SCRIPT))

        dev_dep = DevDep(files=(DEV_DEP_OUTPUT,))
        cache.store(fingerprint, dev_dep)
        logger.info(f"Built dev dependency '{src.name}' for '{dst.name}'")
        return dev_dep
