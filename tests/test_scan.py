import pytest

from squashrepo.lib.scan import PackageArtifact, extract_base_name, scan_artifacts


@pytest.mark.parametrize(
    "path, expected",
    [
        ("foo-1.2.3-1-x86_64.pkg.tar.zst", "foo"),
        ("nomarker.pkg.tar.zst", "nomarker.pkg.tar.zst"),
        ("/mnt/repo/x86_64/lib32-glibc-2.39-1-x86_64.pkg.tar.zst", "lib32-glibc"),
        ("python-3to2-1.1-1-any.pkg.tar.zst", "python"),
        ("myapp-2.0-1-x86_64.pkg.tar.zst", "myapp"),
    ],
)
def test_extract_base_name(path, expected):
    assert extract_base_name(path) == expected


def test_artifact_from_path():
    a = PackageArtifact.from_path("/r/foo-1.0-1-any.pkg.tar.zst")
    assert a == PackageArtifact(path="/r/foo-1.0-1-any.pkg.tar.zst", base_name="foo")


def test_scan_is_recursive_and_sorted(tmp_path, make_packages):
    make_packages(
        tmp_path,
        [
            "b/zed-1.0-1-any.pkg.tar.zst",
            "alpha-2.0-1-any.pkg.tar.zst",
            "deep/er/mid-0.1-1-any.pkg.tar.zst",
            "notes.txt",
            "alpha-2.0-1-any.pkg.tar.zst.sig",
        ],
    )
    (tmp_path / "fake.pkg.tar.zst").mkdir()

    found = scan_artifacts(str(tmp_path))

    assert [a.path for a in found] == sorted(a.path for a in found)
    assert sorted(a.base_name for a in found) == ["alpha", "mid", "zed"]


def test_scan_empty_tree(tmp_path):
    assert scan_artifacts(str(tmp_path)) == []


def test_scan_custom_suffix(tmp_path, make_packages):
    make_packages(tmp_path, ["a-1.0-1-any.pkg.tar.xz", "b-1.0-1-any.pkg.tar.zst"])
    found = scan_artifacts(str(tmp_path), suffix=".pkg.tar.xz")
    assert [a.base_name for a in found] == ["a"]


def test_scan_missing_mount_point(tmp_path):
    assert scan_artifacts(str(tmp_path / "never-mounted")) == []
