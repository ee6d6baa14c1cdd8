import io
import json

import pytest

from dedupgo.cli import build_parser, main, output_json, output_text
from dedupgo.scanner import ScanResult


@pytest.fixture
def tree(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    (data / "a.txt").write_bytes(b"same bytes")
    (data / "b.txt").write_bytes(b"same bytes")
    (data / "c.txt").write_bytes(b"different")
    return data


@pytest.fixture
def no_config(tmp_path):
    return str(tmp_path / "absent.yaml")


def test_parser_defaults():
    args = build_parser().parse_args(["dir"])
    assert (args.hash, args.min_size, args.output) == ("md5", "0", "txt")
    assert args.force is False
    assert args.trash is True
    assert args.dirs == ["dir"]


def test_parser_flags():
    args = build_parser().parse_args(["-hash", "sha256", "--force", "--no-trash", "x", "y"])
    assert args.hash == "sha256"
    assert args.force is True
    assert args.trash is False
    assert args.dirs == ["x", "y"]


def test_main_requires_directory(no_config, capsys):
    assert main(["--config", no_config]) == 1
    assert "错误: 请指定至少一个扫描目录" in capsys.readouterr().err


def test_main_json_output(tree, no_config, capsys):
    assert main(["--config", no_config, "--output", "json", str(tree)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["TotalFiles"] == 3
    assert list(data["DuplicateGroups"].values()) == [
        [str(tree / "a.txt"), str(tree / "b.txt")]
    ]
    assert data["SavedSize"] == len(b"same bytes")


def test_main_sha256_keys(tree, no_config, capsys):
    assert main(["--config", no_config, "--hash", "sha256", "--output", "json", str(tree)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [len(key) for key in data["DuplicateGroups"]] == [64]


def test_main_text_dry_run(tree, no_config, capsys):
    assert main(["--config", no_config, str(tree)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("扫描完成！\n总文件数: 3\n")
    assert f"  [保留] {tree / 'a.txt'}\n" in out
    assert f"  [待删除] {tree / 'b.txt'}\n" in out
    assert "提示: 这是预览模式。使用 --force 参数执行实际删除操作。" in out


def test_main_force_marks_deleted(tree, no_config, capsys):
    assert main(["--config", no_config, "--force", str(tree)]) == 0
    out = capsys.readouterr().out
    assert f"  [已删除] {tree / 'b.txt'}\n" in out
    assert "预览模式" not in out


def test_config_file_selects_json(tree, tmp_path, capsys):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("output_format: JSON\n", encoding="utf-8")
    assert main(["--config", str(cfg), str(tree)]) == 0
    assert json.loads(capsys.readouterr().out)["TotalFiles"] == 3


def test_config_exclude_patterns_apply(tree, tmp_path, capsys):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("exclude_patterns: ['*.txt']\noutput_format: json\n", encoding="utf-8")
    assert main(["--config", str(cfg), str(tree)]) == 0
    assert json.loads(capsys.readouterr().out)["TotalFiles"] == 0


def test_bad_config_fails(tree, tmp_path, capsys):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("hash_algorithm: [1, 2]\n", encoding="utf-8")
    assert main(["--config", str(cfg), str(tree)]) == 1
    assert "加载配置失败" in capsys.readouterr().err


def test_missing_directory_fails(tmp_path, no_config, capsys):
    assert main(["--config", no_config, str(tmp_path / "nowhere")]) == 1
    assert "扫描失败" in capsys.readouterr().err


def test_output_text_without_duplicates():
    stream = io.StringIO()
    output_text(ScanResult(total_files=2, total_size=10), True, stream)
    text = stream.getvalue()
    assert "总文件数: 2\n" in text
    assert text.endswith("未发现重复文件\n")


def test_output_json_round_trip():
    result = ScanResult({"abc": ["x", "y"]}, 2, 8, 4)
    stream = io.StringIO()
    output_json(result, stream)
    assert stream.getvalue().endswith("\n")
    assert json.loads(stream.getvalue()) == result.to_dict()