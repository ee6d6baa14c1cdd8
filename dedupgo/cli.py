"""Command-line interface for finding duplicate files."""

from __future__ import annotations

import argparse
import json
import sys
from typing import TextIO

import yaml

from dedupgo.config import load_config
from dedupgo.scanner import ScanResult, Scanner

_MB = 1024 * 1024


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the command."""
    parser = argparse.ArgumentParser(prog="dedupgo", description="查找并清理重复文件")
    parser.add_argument("-config", "--config", default="", help="配置文件路径")
    parser.add_argument("-hash", "--hash", default="md5", help="哈希算法 (md5/sha256)")
    parser.add_argument("-min-size", "--min-size", default="0", help="最小文件大小 (例如: 10MB)")
    parser.add_argument("-force", "--force", action="store_true", help="强制删除重复文件")
    parser.add_argument("-output", "--output", default="txt", help="输出格式 (txt/json)")
    parser.add_argument(
        "-trash", "--trash", action=argparse.BooleanOptionalAction, default=True, help="使用回收站"
    )
    parser.add_argument("dirs", nargs="*", help="扫描目录")
    return parser


def output_json(result: ScanResult, stream: TextIO | None = None) -> None:
    """Write the result as indented JSON."""
    out = stream or sys.stdout
    json.dump(result.to_dict(), out, indent=2, ensure_ascii=False)
    out.write("\n")


def output_text(result: ScanResult, is_dry_run: bool, stream: TextIO | None = None) -> None:
    """Write a plain-text summary of the result."""
    out = stream or sys.stdout
    out.write("扫描完成！\n")
    out.write(f"总文件数: {result.total_files}\n")
    out.write(f"总大小: {result.total_size / _MB:.2f} MB\n")
    out.write(f"可节省空间: {result.saved_size / _MB:.2f} MB\n\n")

    if not result.duplicate_groups:
        out.write("未发现重复文件\n")
        return

    out.write(f"发现 {len(result.duplicate_groups)} 组重复文件:\n\n")
    for digest, files in result.duplicate_groups.items():
        out.write(f"哈希值: {digest}\n")
        kept, *rest = files
        out.write(f"  [保留] {kept}\n")
        marker = "[待删除]" if is_dry_run else "[已删除]"
        for path in rest:
            out.write(f"  {marker} {path}\n")
        out.write("\n")

    if is_dry_run:
        out.write("提示: 这是预览模式。使用 --force 参数执行实际删除操作。\n")


def main(argv: list[str] | None = None) -> int:
    """Run the command and return its exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"加载配置失败: {exc}", file=sys.stderr)
        return 1

    if args.hash != "md5":
        cfg.hash_algorithm = args.hash
    if args.min_size != "0":
        cfg.min_size = args.min_size
    cfg.dry_run = not args.force
    if args.output != "txt":
        cfg.output_format = args.output
    cfg.use_trash = args.trash

    if not args.dirs:
        print("错误: 请指定至少一个扫描目录", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    scanner = Scanner(
        hash_algorithm=cfg.hash_algorithm,
        min_size=0,
        file_types=cfg.include_types,
        exclude_patterns=cfg.exclude_patterns,
    )
    try:
        result = scanner.scan(*args.dirs)
    except OSError as exc:
        print(f"扫描失败: {exc}", file=sys.stderr)
        return 1

    if cfg.output_format.lower() == "json":
        output_json(result)
    else:
        output_text(result, cfg.dry_run)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())