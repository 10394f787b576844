import json
from pathlib import Path

import pytest

from line_snipe import cli


def test_prints_matching_lines(sample_file: Path, capsys) -> None:
    status = cli.main(["world", str(sample_file)])

    out = capsys.readouterr().out
    assert status == cli.EXIT_MATCH
    assert out == "This is the second line with the hello world phrase in it\n"


def test_ignore_case_with_workers(sample_file: Path, capsys) -> None:
    status = cli.main(["WORLD", str(sample_file), "-i", "-j", "2", "-c", "1"])

    lines = capsys.readouterr().out.splitlines()
    assert status == cli.EXIT_MATCH
    assert len(lines) == 2


def test_no_match_exit_status(sample_file: Path, capsys) -> None:
    assert cli.main(["absent", str(sample_file)]) == cli.EXIT_NO_MATCH
    assert capsys.readouterr().out == ""


def test_file_action_prints_matching_file_names(tmp_path: Path, capsys) -> None:
    (tmp_path / "a.txt").write_text("needle\n")
    (tmp_path / "b.txt").write_text("hay\n")

    status = cli.main(["needle", str(tmp_path), "-a", "file"])

    assert status == cli.EXIT_MATCH
    assert capsys.readouterr().out.splitlines() == [str(tmp_path / "a.txt")]


def test_boolean_action_prints_nothing(sample_file: Path, capsys) -> None:
    assert cli.main(["world", str(sample_file), "-a", "boolean"]) == cli.EXIT_MATCH
    assert capsys.readouterr().out == ""


def test_invalid_action_is_an_error(sample_file: Path, capsys) -> None:
    status = cli.main(["world", str(sample_file), "-a", "count"])

    assert status == cli.EXIT_ERROR
    assert "action count is invalid" in capsys.readouterr().err


def test_missing_path_is_an_error(tmp_path: Path, capsys) -> None:
    status = cli.main(["x", str(tmp_path / "missing")])

    assert status == cli.EXIT_ERROR
    assert "Path not found" in capsys.readouterr().err


def test_skipped_entries_go_to_stderr_and_fail_the_run(tmp_path: Path, capsys) -> None:
    (tmp_path / "good.txt").write_text("needle\n")
    (tmp_path / "bad.bin").write_bytes(b"\xff\xfe needle\n")

    status = cli.main(["needle", str(tmp_path)])

    captured = capsys.readouterr()
    assert status == cli.EXIT_ERROR
    assert captured.out == "needle\n"
    assert "skipped" in captured.err and "bad.bin" in captured.err


def test_json_output(sample_file: Path, capsys) -> None:
    cli.main(["world", str(sample_file), "--json"])

    data = json.loads(capsys.readouterr().out)
    assert data["total_matches"] == 1
    assert data["hits"][0]["path"] == str(sample_file)


def test_workers_are_clamped_to_cpu_count(monkeypatch) -> None:
    monkeypatch.setattr(cli.os, "cpu_count", lambda: 4)

    assert cli._clamp_workers(64) == 4
    assert cli._clamp_workers(0) == 0
    assert cli._clamp_workers(-3) == 0


def test_missing_arguments_exit_via_argparse() -> None:
    with pytest.raises(SystemExit):
        cli.main([])
