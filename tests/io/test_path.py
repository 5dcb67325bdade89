import pytest
from pathlib import Path

from appforge.io.path import AFPath, is_path_absolute
from appforge.exceptions import InvalidPathError


class TestAFPath:
    """Unit tests for the AFPath class."""

    @pytest.mark.parametrize(
        "path_str, expected_protocol, expected_path_posix",
        [
            ("local/file.txt", "file", "local/file.txt"),
            ("/absolute/path", "file", "/absolute/path"),
            ("file:///absolute/path", "file", "/absolute/path"),
            ("resource:/apps/go/common", "resource", "/apps/go/common"),
            ("memory:/out/app", "memory", "/out/app"),
            ("/", "file", "/"),
        ],
    )
    def test_initialization_parsing(self, path_str, expected_protocol, expected_path_posix):
        """Tests that AFPath correctly parses various path formats upon creation."""
        path = AFPath(path_str)
        assert path.protocol == expected_protocol
        assert path.__path__() == expected_path_posix

    def test_protocol_checkers(self):
        assert AFPath("local/file").is_file()
        assert AFPath("resource:/path").is_resource()
        assert AFPath("memory:/path").is_memory()
        assert not AFPath("local/file").is_resource()
        assert not AFPath("resource:/path").is_file()

    def test_parent_preserves_protocol(self):
        path = AFPath("memory:/out/app/dev")
        parent = path.parent
        assert isinstance(parent, AFPath)
        assert parent.protocol == "memory"
        assert str(parent) == "memory:/out/app"
        assert str(AFPath("resource:/").parent) == "resource:/"

    def test_joinpath_and_truediv_preserve_protocol(self):
        base = AFPath("resource:/apps/go")
        joined = base.joinpath("common", "dev")
        assert isinstance(joined, AFPath)
        assert joined.protocol == "resource"
        assert str(joined) == "resource:/apps/go/common/dev"
        assert str(base / "common" / "dev") == "resource:/apps/go/common/dev"

    def test_relative_to_keeps_protocol(self):
        rel = AFPath("memory:/out/app/dev/Vagrantfile").relative_to(AFPath("memory:/out/app"))
        assert rel.protocol == "memory"
        assert rel.parts == ("dev", "Vagrantfile")

    def test_with_name_keeps_protocol(self):
        path = AFPath("memory:/out/Vagrantfile.tpl").with_name("Vagrantfile")
        assert str(path) == "memory:/out/Vagrantfile"

    def test_rtruediv_operator(self):
        result = "prefix" / AFPath("subdir/file.txt")
        assert isinstance(result, AFPath)
        assert result.protocol == "file"
        assert str(result) == "prefix/subdir/file.txt"

    @pytest.mark.parametrize(
        "path_str, expected_str",
        [
            ("local/file", "local/file"),
            ("/abs/file", "/abs/file"),
            ("resource:/data", "resource:/data"),
            ("memory:/data", "memory:/data"),
        ],
    )
    def test_str_representation(self, path_str, expected_str):
        assert str(AFPath(path_str)) == expected_str

    def test_repr_representation(self):
        assert repr(AFPath("resource:/data")) == "AFPath('resource:/data')"

    def test_equality_includes_protocol(self):
        assert AFPath("memory:/a") == AFPath("memory:/a")
        assert AFPath("memory:/a") != AFPath("/a")
        assert len({AFPath("memory:/a"), AFPath("memory:/a"), AFPath("/a")}) == 2

    def test_is_absolute(self):
        assert AFPath("/local/file").is_absolute()
        assert not AFPath("local/file").is_absolute()
        assert AFPath(r"C:\Windows").is_absolute()
        assert AFPath("resource:/path/to/data").is_absolute()

    def test_to_local(self):
        assert AFPath("/tmp/x").to_local() == Path("/tmp/x")
        with pytest.raises(InvalidPathError):
            AFPath("memory:/x").to_local()

    def test_is_path_absolute_helper(self):
        assert is_path_absolute("/etc")
        assert is_path_absolute("D:\\data")
        assert not is_path_absolute("etc")


if __name__ == "__main__":
    pytest.main()
