import os
from datetime import datetime

import pytest

from dedupgo.report import (
    delete_duplicates,
    deletion_plan,
    format_delete_confirmation,
    format_delete_summary,
    format_scan_report,
)
from dedupgo.scanner import ScanResult, Scanner


@pytest.fixture
def duplicate_tree(tmp_path):
    for name in ("a.txt", "b.txt", "c.txt"):
        (tmp_path / name).write_bytes(b"duplicate body")
    (tmp_path / "x.bin").write_bytes(b"12")
    (tmp_path / "y.bin").write_bytes(b"12")
    (tmp_path / "unique.txt").write_bytes(b"alone")
    return tmp_path


def test_report_without_duplicates():
    text = format_scan_report(ScanResult())
    assert "恭喜！未发现重复文件" in text
    assert "重复文件列表" not in text


def test_report_lists_every_group(duplicate_tree):
    result = Scanner().scan(duplicate_tree)
    text = format_scan_report(result)
    assert "第 1 组" in text
    assert "第 2 组" in text
    for group in result.duplicate_groups.values():
        for path in group:
            assert f"  │   {path}\n" in text
    assert text.count("🟢 原始文件") == len(result.duplicate_groups)
    assert text.count("🔴 重复文件") == sum(len(g) - 1 for g in result.duplicate_groups.values())


def test_report_shows_modification_time(tmp_path):
    stamp = datetime(2024, 1, 2, 3, 4).timestamp()
    for name in ("a", "b"):
        path = tmp_path / name
        path.write_bytes(b"same")
        os.utime(path, (stamp, stamp))
    text = format_scan_report(Scanner().scan(tmp_path))
    assert text.count("修改于: 2024-01-02 03:04") == 2


def test_deletion_plan_keeps_first_of_each_group(duplicate_tree):
    result = Scanner().scan(duplicate_tree)
    files, total = deletion_plan(result)
    expected = [p for g in result.duplicate_groups.values() for p in g[1:]]
    assert files == expected
    assert total == sum(os.stat(p).st_size for p in expected)


def test_deletion_plan_ignores_vanished_files(duplicate_tree):
    result = Scanner().scan(duplicate_tree)
    files, _ = deletion_plan(result)
    os.remove(files[0])
    remaining, total = deletion_plan(result)
    assert remaining == files
    assert total == sum(os.stat(p).st_size for p in files[1:])


def test_delete_duplicates_counts_successes(duplicate_tree):
    result = Scanner().scan(duplicate_tree)
    removed = []
    deleted, failed = delete_duplicates(result, removed.append)
    assert removed == deletion_plan(result)[0]
    assert (deleted, failed) == (len(removed), 0)


def test_delete_duplicates_counts_failures(duplicate_tree):
    result = Scanner().scan(duplicate_tree)
    files = deletion_plan(result)[0]

    def remover(path):
        if path == files[0]:
            raise OSError("busy")
        os.remove(path)

    deleted, failed = delete_duplicates(result, remover)
    assert (deleted, failed) == (len(files) - 1, 1)
    assert os.path.exists(files[0])
    assert not any(os.path.exists(p) for p in files[1:])


def test_delete_confirmation_text():
    text = format_delete_confirmation(3, 2 * 1024 * 1024)
    assert text.startswith("确定要删除 3 个重复文件吗？\n")
    assert "总计可释放 2.00 MB 空间" in text
    assert text.endswith("注意：删除的文件将被移动到回收站")


def test_delete_summary_text():
    text = format_delete_summary(4, 1)
    assert "✅ 成功删除: 4 个文件" in text
    assert "❌ 删除失败: 1 个文件" in text