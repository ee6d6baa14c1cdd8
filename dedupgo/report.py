"""Scan reports and duplicate removal for the interactive front end."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable
from datetime import datetime

from dedupgo.scanner import ScanResult, move_to_trash

_MB = 1024 * 1024


def format_scan_report(result: ScanResult) -> str:
    """Render a scan result as a boxed text report."""
    lines = [
        "",
        "  扫描结果统计:",
        "  ┌─────────────────┬─────────────┐",
        f"  │ 📁 总文件数    │ {result.total_files:9d} │",
        f"  │ 💾 总大小      │ {result.total_size / _MB:8.1f} MB│",
        f"  │ 🗑️ 可节省空间  │ {result.saved_size / _MB:8.1f} MB│",
        f"  │ 🔍 重复文件组  │ {len(result.duplicate_groups):9d} │",
        "  └─────────────────┴─────────────┘",
        "",
    ]

    if not result.duplicate_groups:
        lines.append("  ✨ 恭喜！未发现重复文件")
        return "\n".join(lines) + "\n"

    lines.extend(["  📑 重复文件列表:", ""])
    for number, files in enumerate(result.duplicate_groups.values(), start=1):
        file_size = os.stat(files[0]).st_size
        saved = file_size * (len(files) - 1) / _MB
        lines.extend(
            [
                "  ┌───────────────────────────────┐",
                f"  │ 📌 第 {number} 组                   │",
                "  ├───────────────────────────────┤",
                f"  │ 📦 文件数: {len(files):<3d}               │",
                f"  │ 📏 大小: {file_size / _MB:<6.1f} MB           │",
                f"  │ 💾 节省: {saved:<6.1f} MB           │",
                "  ├───────────────────────────────┤",
            ]
        )
        for index, path in enumerate(files):
            modified = datetime.fromtimestamp(os.stat(path).st_mtime)
            if index == 0:
                lines.append("  │ 🟢 原始文件                   │")
            else:
                lines.append("  │ 🔴 重复文件                   │")
            lines.append(f"  │   {path}")
            lines.append(f"  │   修改于: {modified:%Y-%m-%d %H:%M}   │")
            lines.append("  │                               │")
        lines.extend(["  └───────────────────────────────┘", ""])
    return "\n".join(lines) + "\n"


def deletion_plan(result: ScanResult) -> tuple[list[str], int]:
    """Return the files to remove (all but the first of each group) and their total size.

    Files that can no longer be found add nothing to the size.
    """
    files = [path for group in result.duplicate_groups.values() for path in group[1:]]
    total_size = 0
    for path in files:
        try:
            total_size += os.stat(path).st_size
        except OSError:
            pass
    return files, total_size


def format_delete_confirmation(file_count: int, total_size: int) -> str:
    """Return the question asked before removing duplicates."""
    return (
        f"确定要删除 {file_count} 个重复文件吗？\n"
        f"总计可释放 {total_size / _MB:.2f} MB 空间\n\n"
        "注意：删除的文件将被移动到回收站"
    )


def delete_duplicates(
    result: ScanResult,
    remover: Callable[[str], None] | None = None,
) -> tuple[int, int]:
    """Remove every file but the first of each group.

    Returns the number of files removed and the number that failed.
    """
    remove = remover or move_to_trash
    deleted = failed = 0
    for path in deletion_plan(result)[0]:
        try:
            remove(path)
        except (OSError, subprocess.SubprocessError):
            failed += 1
        else:
            deleted += 1
    return deleted, failed


def format_delete_summary(deleted_count: int, error_count: int) -> str:
    """Return the message shown after removing duplicates."""
    return (
        "🗑️ 删除操作完成！\n\n"
        f"✅ 成功删除: {deleted_count} 个文件\n"
        f"❌ 删除失败: {error_count} 个文件\n\n"
        "提示：删除的文件已移动到回收站，可以随时恢复。"
    )