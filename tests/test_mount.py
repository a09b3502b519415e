import pytest

from squashrepo.errors import MountFailure, UnmountFailure
from squashrepo.lib.mount import MountSession, mount_archive, remove_mount_point, unmount_archive


def test_mount_creates_missing_mount_point(tmp_path, runner):
    mp = tmp_path / "a" / "b" / "repo"

    session = mount_archive("/x/repo.squashfs", str(mp), runner=runner)

    assert mp.is_dir()
    assert session.created_dir and session.mounted
    assert runner.calls == [["mount", "-t", "squashfs", "-o", "ro", "/x/repo.squashfs", str(mp)]]


def test_mount_failure_removes_created_dir(tmp_path, runner):
    mp = tmp_path / "repo"
    runner.script("mount", returncode=32)

    with pytest.raises(MountFailure):
        mount_archive("/x/repo.squashfs", str(mp), runner=runner)

    assert not mp.exists()


def test_mount_failure_keeps_existing_dir(tmp_path, runner):
    mp = tmp_path / "repo"
    mp.mkdir()
    runner.script("mount", returncode=32)

    with pytest.raises(MountFailure):
        mount_archive("/x/repo.squashfs", str(mp), runner=runner)

    assert mp.is_dir()


def test_round_trip_leaves_existing_dir_empty(tmp_path, runner):
    mp = tmp_path / "repo"
    mp.mkdir()
    (tmp_path / "other").write_text("keep")
    before = sorted(p.name for p in tmp_path.iterdir())

    session = mount_archive("/x/repo.squashfs", str(mp), runner=runner)
    unmount_archive(session, runner=runner)

    assert sorted(p.name for p in tmp_path.iterdir()) == before
    assert mp.is_dir() and list(mp.iterdir()) == []
    assert len(runner.invoked("umount")) == 1


def test_round_trip_removes_created_dir(tmp_path, runner):
    mp = tmp_path / "repo"

    session = mount_archive("/x/repo.squashfs", str(mp), runner=runner)
    unmount_archive(session, runner=runner)

    assert not mp.exists()
    assert not session.mounted


def test_unmount_failure_still_cleans_up(tmp_path, runner):
    mp = tmp_path / "repo"
    session = mount_archive("/x/repo.squashfs", str(mp), runner=runner)
    runner.script("umount", returncode=32)

    with pytest.raises(UnmountFailure) as exc:
        unmount_archive(session, runner=runner)

    assert not exc.value.aborts
    assert runner.invoked("umount") == [["umount", str(mp)]]
    assert not mp.exists()
    assert session.mounted


def test_remove_mount_point_tolerates_non_empty_dir(tmp_path):
    mp = tmp_path / "repo"
    mp.mkdir()
    (mp / "leftover").write_text("x")
    session = MountSession(archive_path="/x", mount_point=str(mp), created_dir=True)

    assert remove_mount_point(session) is False
    assert mp.is_dir()


def test_uncreatable_mount_point_is_a_mount_failure(tmp_path, runner):
    blocker = tmp_path / "repo"
    blocker.write_text("not a directory")

    with pytest.raises(MountFailure):
        mount_archive("/x/repo.squashfs", str(blocker / "mnt"), runner=runner)

    assert runner.calls == []


def test_dry_run_creates_nothing(tmp_path, runner):
    mp = tmp_path / "repo"

    session = mount_archive("/x/repo.squashfs", str(mp), runner=runner, dry_run=True)
    unmount_archive(session, runner=runner)

    assert not mp.exists()
    assert not session.created_dir
    assert [c[0] for c in runner.calls] == ["mount", "umount"]
