"""Tests for the reclaim CLI commands (free, tree, sizes, export, config)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from reclaim.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    """Keep config resolution away from the real working and home dirs."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "home")


# ── reclaim free ─────────────────────────────────────────────────────


def test_free_ci_prints_answer(transcript_file: Path):
    result = runner.invoke(app, ["free", str(transcript_file), "--ci"])
    assert result.exit_code == 0
    assert result.output.strip() == "24933642"


def test_free_reads_stdin(sample_transcript):
    result = runner.invoke(app, ["free", "--ci"], input=sample_transcript)
    assert result.exit_code == 0
    assert result.output.strip() == "24933642"


def test_free_dash_reads_stdin(sample_transcript):
    result = runner.invoke(app, ["free", "-", "--ci"], input=sample_transcript)
    assert result.exit_code == 0
    assert result.output.strip() == "24933642"


def test_free_panel(transcript_file: Path):
    result = runner.invoke(app, ["free", str(transcript_file)])
    assert result.exit_code == 0
    assert "/d" in result.output
    assert "24933642" in result.output
    assert "21618835" in result.output
    assert "8381165" in result.output


def test_free_overrides(transcript_file: Path):
    result = runner.invoke(
        app,
        ["free", str(transcript_file), "--capacity", "48400000", "--required", "100000", "--ci"],
    )
    assert result.exit_code == 0
    # unused 18835, needed 81165: /a (94853) is the smallest that fits
    assert result.output.strip() == "94853"


def test_free_noop(transcript_file: Path):
    result = runner.invoke(app, ["free", str(transcript_file), "--required", "1000"])
    assert result.exit_code == 0
    assert "Nothing to delete" in result.output


def test_free_noop_ci_prints_zero(transcript_file: Path):
    result = runner.invoke(app, ["free", str(transcript_file), "--required", "1000", "--ci"])
    assert result.exit_code == 0
    assert result.output.strip() == "0"


def test_free_uses_config_file(tmp_path: Path, transcript_file: Path):
    cfg = tmp_path / "disk.yaml"
    cfg.write_text("disk:\n  capacity: 48400000\n  required_free: 100000\n")
    result = runner.invoke(app, ["--config", str(cfg), "free", str(transcript_file), "--ci"])
    assert result.exit_code == 0
    assert result.output.strip() == "94853"


def test_free_oversized_tree(transcript_file: Path):
    result = runner.invoke(
        app, ["free", str(transcript_file), "--capacity", "1000", "--required", "10"]
    )
    assert result.exit_code == 1
    assert "Error" in result.output


def test_free_required_above_capacity(transcript_file: Path):
    result = runner.invoke(
        app, ["free", str(transcript_file), "--capacity", "10", "--required", "20"]
    )
    assert result.exit_code == 1
    assert "cannot exceed" in result.output


def test_free_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["free", str(tmp_path / "nope.txt")])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_free_unknown_child(tmp_path: Path):
    path = tmp_path / "bad.txt"
    path.write_text("$ cd /\n$ ls\ndir a\n$ cd b\n$ ls\n")
    result = runner.invoke(app, ["free", str(path)])
    assert result.exit_code == 1
    assert "Cannot enter" in result.output


def test_free_malformed_line(tmp_path: Path):
    path = tmp_path / "bad.txt"
    path.write_text("$ cd /\n$ ls\nnonsense here\n")
    result = runner.invoke(app, ["free", str(path)])
    assert result.exit_code == 1
    assert "Unrecognized line" in result.output


def test_depth_limit_from_config(tmp_path: Path, transcript_file: Path):
    cfg = tmp_path / "shallow.yaml"
    cfg.write_text("parser:\n  max_depth: 1\n")
    result = runner.invoke(app, ["--config", str(cfg), "free", str(transcript_file)])
    assert result.exit_code == 1
    assert "exceeds limit" in result.output


def test_bad_config_file(tmp_path: Path, transcript_file: Path):
    cfg = tmp_path / "broken.yaml"
    cfg.write_text("log_level: loud\n")
    result = runner.invoke(app, ["--config", str(cfg), "free", str(transcript_file)])
    assert result.exit_code == 1
    assert "Invalid config" in result.output


# ── reclaim tree / sizes / export ────────────────────────────────────


def test_tree_renders_directories_and_files(transcript_file: Path):
    result = runner.invoke(app, ["tree", str(transcript_file)])
    assert result.exit_code == 0
    for expected in ("a/", "e/", "d/", "h.lst", "d.log", "48381165", "94853"):
        assert expected in result.output


def test_tree_without_files(transcript_file: Path):
    result = runner.invoke(app, ["tree", str(transcript_file), "--no-files"])
    assert result.exit_code == 0
    assert "d/" in result.output
    assert "h.lst" not in result.output


def test_sizes_table(transcript_file: Path):
    result = runner.invoke(app, ["sizes", str(transcript_file)])
    assert result.exit_code == 0
    assert "/a/e" in result.output
    assert "24933642" in result.output
    assert "95437" in result.output


def test_sizes_custom_limit(transcript_file: Path):
    result = runner.invoke(app, ["sizes", str(transcript_file), "--limit", "1000"])
    assert result.exit_code == 0
    assert "584" in result.output.splitlines()[-1]


def test_export_stdout(transcript_file: Path):
    result = runner.invoke(app, ["export", str(transcript_file)])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["size"] == 48381165
    assert data["directories"]["d"]["size"] == 24933642


def test_export_to_file(tmp_path: Path, transcript_file: Path):
    out = tmp_path / "out" / "tree.json"
    result = runner.invoke(app, ["export", str(transcript_file), "--output", str(out)])
    assert result.exit_code == 0
    assert json.loads(out.read_text())["directories"]["a"]["size"] == 94853


# ── reclaim config ───────────────────────────────────────────────────


def test_config_init_creates_file(tmp_path: Path):
    result = runner.invoke(app, ["config", "init"])
    assert result.exit_code == 0
    assert (tmp_path / "reclaim.yaml").is_file()


def test_config_init_refuses_overwrite(tmp_path: Path):
    (tmp_path / "reclaim.yaml").write_text("log_level: info\n")
    result = runner.invoke(app, ["config", "init"])
    assert result.exit_code == 1
    assert "already exists" in result.output
    assert (tmp_path / "reclaim.yaml").read_text() == "log_level: info\n"


def test_config_init_force(tmp_path: Path):
    (tmp_path / "reclaim.yaml").write_text("log_level: info\n")
    result = runner.invoke(app, ["config", "init", "--force"])
    assert result.exit_code == 0
    assert "required_free" in (tmp_path / "reclaim.yaml").read_text()


def test_config_show():
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    assert "capacity" in result.output
    assert "70000000" in result.output


# ── names containing "/" ─────────────────────────────────────────────


SLASHED_NAME_TRANSCRIPT = (
    "$ cd /\n$ ls\ndir a/b\ndir a\n$ cd a\n$ ls\ndir b\n$ cd b\n$ ls\n5 f\n"
)


def test_export_slashed_name_keeps_own_size():
    result = runner.invoke(app, ["export"], input=SLASHED_NAME_TRANSCRIPT)
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["directories"]["a/b"]["size"] == 0
    assert data["directories"]["a"]["directories"]["b"]["size"] == 5


def test_tree_slashed_name_keeps_own_branch():
    result = runner.invoke(app, ["tree"], input=SLASHED_NAME_TRANSCRIPT)
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert any("a/b/ (0)" in line for line in lines)
    nested = next(i for i, line in enumerate(lines) if line.rstrip().endswith(" b/ (5)"))
    assert "f" in lines[nested + 1]
