import os

import pytest

from xengine_apps.filesort import (
    Listing,
    RenameEntry,
    RenameStatus,
    apply_renames,
    list_files,
    main,
    numeric_prefix,
    plan_renames,
    sort_files,
    sort_key,
)


def _touch(directory, name, content="x"):
    path = directory / name
    path.write_text(content)
    return path


@pytest.mark.parametrize(
    "path, expected",
    [
        ("dir/10.txt", 10),
        ("dir\\7.jpg", 7),
        ("12abc.png", 12),
        ("abc.txt", 0),
        ("3", 3),
    ],
)
def test_numeric_prefix(path, expected):
    assert numeric_prefix(path) == expected


def test_sort_files_numeric_before_text():
    paths = ["d/10.txt", "d/2.txt", "d/1.txt"]
    assert sort_files(paths) == ["d/1.txt", "d/2.txt", "d/10.txt"]


def test_sort_files_ties_broken_by_path():
    paths = ["d/b.txt", "d/a.txt", "d/1.txt"]
    assert sort_files(paths) == ["d/a.txt", "d/b.txt", "d/1.txt"]


def test_sort_key_orders_like_sort_files():
    paths = ["x/5.a", "x/05.b", "x/zz", "x/3.c"]
    result = sort_files(paths)
    keys = [sort_key(p) for p in result]
    assert keys == sorted(keys)
    assert sorted(result) == sorted(paths)


def test_plan_renames_targets():
    plan = plan_renames(["d/a.jpg", "d/b.png"], start=1)
    assert [e.target for e in plan] == ["d/1.jpg", "d/2.png"]
    assert [e.index for e in plan] == [0, 1]
    assert all(e.status is None for e in plan)


def test_plan_renames_keeps_sources_and_directory():
    sources = ["some/dir/x.tar.gz", "some/dir/y.md"]
    plan = plan_renames(sources, start=5)
    assert [e.source for e in plan] == sources
    assert all(e.target.startswith("some/dir/") for e in plan)
    assert plan[0].target.endswith(".gz")


def test_list_files_skips_hidden_and_dirs(tmp_path):
    _touch(tmp_path, "2.txt")
    _touch(tmp_path, "1.txt")
    _touch(tmp_path, ".secret")
    (tmp_path / "sub").mkdir()
    listing = list_files(tmp_path)
    assert isinstance(listing, Listing)
    assert listing.hidden_count == 1
    assert [os.path.basename(p) for p in listing.files] == ["1.txt", "2.txt"]


def test_apply_renames_upward_shift(tmp_path):
    _touch(tmp_path, "1.txt", "one")
    _touch(tmp_path, "2.txt", "two")
    plan = plan_renames(list_files(tmp_path).files, start=2)
    result = apply_renames(plan)
    assert [e.status for e in result] == [RenameStatus.SUCCESS] * 2
    assert (tmp_path / "2.txt").read_text() == "one"
    assert (tmp_path / "3.txt").read_text() == "two"
    assert not (tmp_path / "1.txt").exists()


def test_apply_renames_downward_shift(tmp_path):
    _touch(tmp_path, "2.txt", "two")
    _touch(tmp_path, "3.txt", "three")
    plan = plan_renames(list_files(tmp_path).files, start=1)
    result = apply_renames(plan)
    assert [e.status for e in result] == [RenameStatus.SUCCESS] * 2
    assert (tmp_path / "1.txt").read_text() == "two"
    assert (tmp_path / "2.txt").read_text() == "three"
    assert not (tmp_path / "3.txt").exists()


def test_apply_renames_same_name(tmp_path):
    _touch(tmp_path, "1.txt", "one")
    plan = plan_renames(list_files(tmp_path).files, start=1)
    result = apply_renames(plan)
    assert result[0].status is RenameStatus.SAME
    assert (tmp_path / "1.txt").read_text() == "one"


def test_apply_renames_target_exists(tmp_path):
    source = _touch(tmp_path, "a.txt", "a")
    target = _touch(tmp_path, "9.txt", "nine")
    entry = RenameEntry(0, str(source), str(target))
    result = apply_renames([entry])
    assert result[0].status is RenameStatus.EXISTS
    assert target.read_text() == "nine"
    assert source.exists()


def test_apply_renames_missing_source_fails(tmp_path):
    entry = RenameEntry(0, str(tmp_path / "gone.txt"), str(tmp_path / "1.txt"))
    result = apply_renames([entry])
    assert result[0].status is RenameStatus.FAILED


def test_apply_renames_empty():
    assert apply_renames([]) == []


def test_main_renames(tmp_path, capsys):
    _touch(tmp_path, "b.txt", "b")
    _touch(tmp_path, "a.txt", "a")
    assert main([str(tmp_path), "--start", "1"]) == 0
    assert (tmp_path / "1.txt").read_text() == "a"
    assert (tmp_path / "2.txt").read_text() == "b"
    assert "success" in capsys.readouterr().out


def test_main_dry_run_leaves_files(tmp_path):
    _touch(tmp_path, "a.txt", "a")
    assert main([str(tmp_path), "--dry-run"]) == 0
    assert (tmp_path / "a.txt").exists()
    assert not (tmp_path / "1.txt").exists()


def test_main_missing_directory(tmp_path):
    assert main([str(tmp_path / "nope")]) == 1