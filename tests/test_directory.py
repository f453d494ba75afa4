"""Tests for tabby.directory — embedded and filesystem asset stores."""

from pathlib import Path

import pytest

from tabby.directory import EmbeddedDirectory, File, FilesystemDirectory
from tabby.hashing import fingerprint


class TestFile:
    """File — frozen record of bytes plus optional fingerprint."""

    def test_hash_defaults_to_none(self) -> None:
        assert File(data=b"x").hash is None

    def test_frozen(self) -> None:
        f = File(data=b"x", hash="0" * 16)
        with pytest.raises(AttributeError):
            f.data = b"y"  # type: ignore[misc]


class TestEmbeddedDirectory:
    """EmbeddedDirectory — immutable lookup table."""

    def test_read_hit(self) -> None:
        file = File(data=b"body{}", hash=fingerprint(b"body{}"))
        directory = EmbeddedDirectory({"a/x.css": file})
        assert directory.read("a/x.css") is file

    def test_read_miss(self) -> None:
        directory = EmbeddedDirectory({"a/x.css": File(data=b"")})
        assert directory.read("a/missing.css") is None
        assert directory.read("/a/x.css") is None

    def test_source_mapping_changes_do_not_leak(self) -> None:
        source = {"a.txt": File(data=b"a")}
        directory = EmbeddedDirectory(source)
        source["b.txt"] = File(data=b"b")
        assert directory.read("b.txt") is None

    def test_files_view_is_read_only(self) -> None:
        directory = EmbeddedDirectory({"a.txt": File(data=b"a")})
        with pytest.raises(TypeError):
            directory.files["b.txt"] = File(data=b"b")  # type: ignore[index]

    def test_paths_sorted(self) -> None:
        directory = EmbeddedDirectory({
            "b.txt": File(data=b""),
            "a/c.txt": File(data=b""),
        })
        assert list(directory.paths()) == ["a/c.txt", "b.txt"]
        assert len(directory) == 2


class TestFilesystemDirectory:
    """FilesystemDirectory — live reads, never a fingerprint."""

    def test_read_hit_has_no_hash(self, asset_root: Path) -> None:
        directory = FilesystemDirectory(asset_root)
        file = directory.read("a/x.css")
        assert file is not None
        assert file.data == b"body{}"
        assert file.hash is None

    def test_read_missing(self, asset_root: Path) -> None:
        assert FilesystemDirectory(asset_root).read("a/nope.css") is None

    def test_read_directory_is_none(self, asset_root: Path) -> None:
        assert FilesystemDirectory(asset_root).read("a") is None

    def test_sees_external_changes(self, asset_root: Path) -> None:
        directory = FilesystemDirectory(asset_root)
        before = directory.read("a/x.css")
        (asset_root / "a" / "x.css").write_bytes(b"body{color:red}")
        after = directory.read("a/x.css")

        assert before is not None and after is not None
        assert before.data == b"body{}"
        assert after.data == b"body{color:red}"
        assert before.hash is None
        assert after.hash is None

    def test_sees_new_and_deleted_files(self, asset_root: Path) -> None:
        directory = FilesystemDirectory(asset_root)
        assert directory.read("new.txt") is None
        (asset_root / "new.txt").write_text("hi")
        assert directory.read("new.txt") == File(data=b"hi")
        (asset_root / "new.txt").unlink()
        assert directory.read("new.txt") is None

    def test_traversal_outside_root_is_none(self, asset_root: Path) -> None:
        (asset_root.parent / "secret.txt").write_text("secret")
        directory = FilesystemDirectory(asset_root)
        assert directory.read("../secret.txt") is None

    def test_nul_in_path_is_none(self, asset_root: Path) -> None:
        directory = FilesystemDirectory(asset_root)
        assert directory.read("a/x\x00.css") is None

    def test_paths(self, asset_root: Path) -> None:
        directory = FilesystemDirectory(asset_root)
        assert list(directory.paths()) == ["a/x.css", "a/y.js"]

    def test_paths_missing_root(self, tmp_path: Path) -> None:
        assert list(FilesystemDirectory(tmp_path / "missing").paths()) == []
