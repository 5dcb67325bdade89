"""
Application driver interface.

A driver knows how to take one kind of application (Go, Ruby, ...)
through the four lifecycle phases. Drivers are stateless: everything they
need arrives in the ApplicationContext, and anything that must survive
between calls is written below ctx.dir or ctx.cache_dir.
"""

from abc import ABC, abstractmethod

from ..datacls import ApplicationContext, CompileResult, DevDep


class App(ABC):
    """Capability interface implemented by every application kind."""

    @abstractmethod
    def compile(self, ctx: ApplicationContext) -> CompileResult:
        """
        Materialize the build directory ctx.dir.

        Returns:
            CompileResult naming the fragment dependents should include.
        """
        pass

    @abstractmethod
    def build(self, ctx: ApplicationContext):
        """Build deployable artifacts from the compiled directory."""
        pass

    @abstractmethod
    def dev(self, ctx: ApplicationContext):
        """Start (or run an action on) the development environment. Blocks."""
        pass

    @abstractmethod
    def dev_dep(self, dst: ApplicationContext, src: ApplicationContext) -> DevDep:
        """
        Build src so that dst can embed it in its development environment.

        Args:
            dst: the application that depends on src
            src: the application being packaged
        """
        pass
