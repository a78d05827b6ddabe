"""Test directory size and file count reporting."""

from connect_helper.utils.fs_utils import get_directory_info


class TestGetDirectoryInfo:
    """Test get_directory_info function."""

    def test_counts_nested_files(self, tmp_path):
        """Test bytes and files are totalled recursively."""
        (tmp_path / "a.txt").write_bytes(b"12345")
        nested = tmp_path / "sub" / "deeper"
        nested.mkdir(parents=True)
        (nested / "b.bin").write_bytes(b"xyz")

        assert get_directory_info(tmp_path) == {"size": 8, "count": 2}

    def test_empty_directory(self, tmp_path):
        """Test an empty directory reports zeros."""
        assert get_directory_info(tmp_path) == {"size": 0, "count": 0}

    def test_missing_path(self, tmp_path):
        """Test a missing path reports zeros."""
        assert get_directory_info(tmp_path / "nope") == {"size": 0, "count": 0}
