import os
import subprocess
import sys
from pathlib import Path

import pytest

from flowtag import __version__
from flowtag.cli import main, build_parser, DEFAULT_LOOKUP, DEFAULT_OUTPUT


def _args(data_dir, out):
    return [
        "--lookup", str(data_dir / "lookup_table.csv"),
        "--logs", str(data_dir / "flow_logs.txt"),
        "--protocol", str(data_dir / "protocol_map.csv"),
        "--output", str(out),
    ]


def test_defaults():
    args = build_parser().parse_args([])
    assert args.lookup == DEFAULT_LOOKUP == "resources/lookup_table.csv"
    assert args.logs == "resources/logs.txt"
    assert args.protocol == "resources/protocol_map.csv"
    assert args.output == DEFAULT_OUTPUT == "resources/output_results.txt"


def test_main_writes_report_and_summary(data_dir, tmp_path, capsys):
    out = tmp_path / "out.txt"
    assert main(_args(data_dir, out)) == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("Tag Frequencies:\nTag,Count\n")
    assert "sv_P1,2\n" in text
    assert "\nPort/Protocol Count:\nPort,Protocol,Count\n" in text
    summary = capsys.readouterr().out
    assert f"flowtag v{__version__}" in summary
    assert "Processed 17 log lines (15 classified)" in summary


def test_quiet_suppresses_summary(data_dir, tmp_path, capsys):
    main(_args(data_dir, tmp_path / "out.txt") + ["--quiet"])
    assert capsys.readouterr().out == ""


def test_unknown_option_exits_before_io(tmp_path, capsys):
    out = tmp_path / "out.txt"
    with pytest.raises(SystemExit) as exc:
        main(["--output", str(out), "--bogus", "x"])
    assert exc.value.code != 0
    err = capsys.readouterr().err
    assert "usage:" in err
    assert "--bogus" in err
    assert not out.exists()


def test_option_prefixes_are_not_accepted(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--look", "x.csv"])
    assert exc.value.code != 0


def test_missing_input_exits_nonzero(data_dir, tmp_path):
    out = tmp_path / "out.txt"
    argv = _args(data_dir, out)
    argv[argv.index("--logs") + 1] = str(tmp_path / "nope.log")
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 1
    assert not out.exists()


def test_module_invocation(data_dir, tmp_path):
    repo = Path(__file__).resolve().parents[1]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(repo / "src"), env.get("PYTHONPATH")) if p)
    out = tmp_path / "out.txt"
    cmd = [sys.executable, "-m", "flowtag.cli"] + _args(data_dir, out)
    proc = subprocess.run(cmd, capture_output=True, text=True, env=env)
    assert proc.returncode == 0, proc.stderr
    assert out.exists()
    assert "Invalid port or protocol number" in proc.stderr

    proc = subprocess.run([sys.executable, "-m", "flowtag.cli", "--nope"], capture_output=True, text=True, env=env)
    assert proc.returncode == 2
    assert "usage:" in proc.stderr


def test_undecodable_log_line_is_skipped(data_dir, tmp_path):
    logs = tmp_path / "bad.log"
    logs.write_bytes(b"2 123 eni 10.0.0.1 10.0.0.2 \xff 25 6 20 10000 1620140661 1620140721 ACCEPT OK\n")
    out = tmp_path / "out.txt"
    argv = _args(data_dir, out)
    argv[argv.index("--logs") + 1] = str(logs)
    assert main(argv + ["--quiet"]) == 0
    assert out.read_text(encoding="utf-8") == "Tag Frequencies:\nTag,Count\n\nPort/Protocol Count:\nPort,Protocol,Count\n"


def test_module_exit_status_on_missing_input(tmp_path):
    repo = Path(__file__).resolve().parents[1]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(repo / "src"), env.get("PYTHONPATH")) if p)
    cmd = [sys.executable, "-m", "flowtag.cli", "--lookup", str(tmp_path / "missing.csv"), "--output", str(tmp_path / "o.txt")]
    proc = subprocess.run(cmd, capture_output=True, text=True, env=env)
    assert proc.returncode == 1
    assert "Run aborted" in proc.stderr
