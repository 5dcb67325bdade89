import pytest

from appforge.io import AFPath, create_app_fs
from appforge.exceptions import (
    AFPathNotFoundError,
    ProtocolError,
    ReadOnlyError,
)


@pytest.fixture
def fs():
    return create_app_fs()


class TestMemoryAndDisk:

    def test_write_creates_parents(self, fs, mem_root):
        target = mem_root / "a" / "b" / "c.txt"
        fs.write_text(target, "hello")
        assert fs.read_text(target) == "hello"
        assert fs.is_dir(mem_root / "a" / "b")
        assert fs.is_file(target)

    def test_disk_roundtrip(self, fs, tmp_path):
        target = AFPath(str(tmp_path / "x" / "y.bin"))
        fs.write_bytes(target, b"\x00\x01")
        assert (tmp_path / "x" / "y.bin").read_bytes() == b"\x00\x01"
        assert fs.exists(target)

    def test_missing_file_is_wrapped(self, fs, tmp_path):
        with pytest.raises(AFPathNotFoundError):
            fs.read_text(AFPath(str(tmp_path / "missing.txt")))

    def test_listdir_keeps_protocol(self, fs, mem_root):
        fs.write_text(mem_root / "one", "1")
        fs.write_text(mem_root / "two", "2")
        names = sorted(p.name for p in fs.listdir(mem_root))
        assert names == ["one", "two"]
        assert all(p.protocol == "memory" for p in fs.listdir(mem_root))

    def test_walk_files_is_sorted_depth_first(self, fs, mem_root):
        for rel in ("b.txt", "a/z.txt", "a/y/x.txt"):
            fs.write_text(mem_root / rel, rel)
        walked = ["/".join(p.relative_to(mem_root).parts) for p in fs.walk_files(mem_root)]
        assert walked == ["a/y/x.txt", "a/z.txt", "b.txt"]


class TestResourceFileSystem:

    def test_reads_packaged_templates(self, fs):
        root = AFPath("resource:/apps/go/common")
        assert fs.is_dir(root)
        assert "Vagrant.configure" in fs.read_text(root / "dev" / "Vagrantfile.tpl")

    def test_missing_resource(self, fs):
        assert not fs.exists(AFPath("resource:/apps/cobol"))

    def test_resources_are_read_only(self, fs):
        with pytest.raises(ReadOnlyError):
            fs.write_text(AFPath("resource:/apps/go/new.txt"), "x")

    def test_unknown_protocol(self, fs):
        path = AFPath("/x", protocol="s3")
        with pytest.raises(ProtocolError):
            fs.read_text(path)
