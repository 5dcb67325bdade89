import os

import pytest

from appforge.config import Appfile
from appforge.core import Core
from appforge.directory import Infra, InfraState, MemoryBackend
from appforge.exceptions import (
    AssetNotFoundError,
    CircularDependencyError,
    DefinitionError,
    PreconditionNotMetError,
    UnknownAppTypeError,
)


@pytest.fixture
def project(write_appfile):
    """web depends on api"""
    write_appfile("api", name="api")
    return Appfile(str(write_appfile("web", name="web", dependencies=["../api"])))


@pytest.fixture
def make_core(ui):
    def _make(appfile, records=None):
        return Core(appfile, appfile.dir / ".appforge", MemoryBackend(records), ui)
    return _make


class TestDependencies:

    def test_transitive_dependencies_come_first(self, write_appfile, make_core):
        write_appfile("db", name="db")
        write_appfile("api", name="api", dependencies=["../db"])
        web = Appfile(str(write_appfile("web", name="web", dependencies=["../api", "../db"])))

        assert [d.name for d in make_core(web).dependencies] == ["db", "api"]

    def test_cycle_is_rejected(self, write_appfile, make_core):
        write_appfile("api", name="api", dependencies=["../web"])
        web = Appfile(str(write_appfile("web", name="web", dependencies=["../api"])))

        with pytest.raises(CircularDependencyError, match="Circular dependency detected"):
            make_core(web).dependencies

    def test_duplicate_names_are_rejected(self, write_appfile, make_core):
        write_appfile("api-v1", name="api")
        write_appfile("api-v2", name="api")
        web = Appfile(str(write_appfile("web", name="web", dependencies=["../api-v1", "../api-v2"])))

        with pytest.raises(DefinitionError, match="'api' is used by both"):
            make_core(web).dependencies


class TestCompile:

    def test_dependency_fragment_reaches_root(self, project, make_core):
        core = make_core(project)
        result = core.compile()

        out = project.dir.to_local() / ".appforge"
        assert (out / "deps" / "api" / "dev-dep" / "build" / "Vagrantfile.fragment").exists()
        assert result.dev_dep_fragment_path == core.app_dir / "dev-dep" / "build" / "Vagrantfile.fragment"

        vagrantfile = (out / "app" / "dev" / "Vagrantfile").read_text()
        assert "# dev dependency: api" in vagrantfile
        assert str(out / "deps" / "api" / "dev-dep" / "build" / "dev-dep-output") in vagrantfile

    def test_unknown_type(self, write_appfile, make_core):
        appfile = Appfile(str(write_appfile("web", type="cobol")))
        with pytest.raises(UnknownAppTypeError, match="'cobol'"):
            make_core(appfile).compile()


class TestBuild:

    def test_requires_compile(self, project, make_core):
        with pytest.raises(PreconditionNotMetError, match="appf compile"):
            make_core(project).build()

    def test_gate_blocks_without_record(self, project, make_core, fake_tools):
        core = make_core(project)
        core.compile()
        with pytest.raises(PreconditionNotMetError, match="hasn't been built yet"):
            core.build()
        assert fake_tools.calls() == []

    def test_builds_root_in_app_dir(self, project, make_core, fake_tools):
        core = make_core(project, {"web-infra": Infra(name="web-infra", state=InfraState.READY)})
        core.compile()
        core.build()

        cwds = {cwd for _, cwd, _ in fake_tools.calls("packer")}
        assert cwds == {os.path.realpath(str(core.app_dir))}


class TestDev:

    def test_builds_dev_deps_then_starts_root(self, project, make_core, fake_tools):
        core = make_core(project)
        core.compile()
        core.dev()

        api_build = os.path.realpath(str(core.deps_dir / "api" / "dev-dep" / "build"))
        root_dev = os.path.realpath(str(core.app_dir / "dev"))
        assert fake_tools.calls() == [
            ("vagrant", api_build, "up"),
            ("vagrant", api_build, "ssh -c bash /appforge/build.sh"),
            ("vagrant", api_build, "destroy -f"),
            ("vagrant", root_dev, "up"),
        ]

    def test_ssh_skips_dev_deps(self, project, make_core, fake_tools):
        core = make_core(project)
        core.compile()
        core.dev("ssh")
        assert [(os.path.basename(cwd), args) for _, cwd, args in fake_tools.calls()] == [("dev", "ssh")]

    def test_missing_dev_dep_output(self, project, make_core, fake_tools):
        fake_tools.vagrant.write_text("#!/bin/sh\nexit 0\n")
        core = make_core(project)
        core.compile()
        with pytest.raises(AssetNotFoundError, match="dev-dep-output"):
            core.dev()
