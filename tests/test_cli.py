"""CLI tests for the csapi entry point."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

from csapi.cli import main, parse_args

PROJECT_DIR = Path(__file__).parent.parent

API = [
    {
        "name": "Page",
        "members": [
            {"kind": "method", "name": "title", "async": True, "type": "string"},
            {
                "kind": "property",
                "name": "colorScheme",
                "type": {"union": ['"light"', '"dark"']},
            },
        ],
    }
]

PROTOCOL = """\
Frame:
  type: interface
  properties:
    url: string
    state:
      type: enum
      literals: [attached, detached]
"""


@pytest.fixture
def api_file(tmp_path: Path) -> Path:
    path = tmp_path / "api.json"
    path.write_text(json.dumps(API), encoding="utf-8")
    return path


def run_cli(*args: str) -> subprocess.CompletedProcess[bytes]:
    """Run csapi as a module from the project directory."""
    return subprocess.run(
        [sys.executable, "-m", "csapi", *args],
        capture_output=True,
        cwd=PROJECT_DIR,
    )


# ── Argument parsing ──


def test_help():
    result = run_cli("--help")
    assert result.returncode == 0
    assert b"csapi [OPTIONS] INPUT" in result.stdout


def test_missing_input():
    result = run_cli()
    assert result.returncode == 2
    assert result.stderr.decode().strip() == "error: missing input file"


@pytest.mark.parametrize(
    "args,message",
    [
        (["--mode", "rust", "api.json"], "error: unknown mode 'rust'"),
        (["--width", "5", "api.json"], "error: --width needs a number of at least 20"),
        (["--bogus", "api.json"], "error: unknown flag '--bogus'"),
        (["a.json", "b.json"], "error: unexpected argument 'b.json'"),
        (["-o"], "error: -o requires an argument"),
    ],
)
def test_usage_errors(args, message, capsys):
    opts, code = parse_args(args)
    assert opts is None
    assert code == 2
    assert capsys.readouterr().err.strip() == message


def test_parse_options():
    opts, code = parse_args(
        ["--mode", "channels", "-o", "out", "--width", "80", "--strict-unions", "--verbose", "p.yml"]
    )
    assert code == 0
    assert opts.mode == "channels"
    assert opts.output_dir == "out"
    assert opts.width == 80
    assert opts.strict_unions
    assert opts.verbose
    assert opts.input_file == "p.yml"


# ── Generation ──


def test_print_to_stdout(api_file: Path, capsys):
    assert main([str(api_file)]) == 0
    out = capsys.readouterr().out
    assert "// IPage.cs" in out
    assert "        Task<string> GetTitleAsync();" in out
    assert "// ColorScheme.cs" in out
    assert out.index("// IPage.cs") < out.index("// ColorScheme.cs")


def test_write_output_dir(api_file: Path, tmp_path: Path):
    out_dir = tmp_path / "generated"
    result = run_cli("-o", str(out_dir), "--namespace", "Acme", str(api_file))
    assert result.returncode == 0, result.stderr.decode()
    assert sorted(p.name for p in out_dir.iterdir()) == ["ColorScheme.cs", "IPage.cs"]
    assert "namespace Acme" in (out_dir / "IPage.cs").read_text(encoding="utf-8")


def test_verbose_logs_to_stderr(api_file: Path, tmp_path: Path, capsys):
    assert main(["--verbose", "-o", str(tmp_path / "out"), str(api_file)]) == 0
    err = capsys.readouterr().err
    assert "Generating IPage" in err
    assert "Registering additional type: ColorScheme" in err
    assert "Wrote " in err


def test_generation_error_exits_1(tmp_path: Path, capsys):
    api = [{"name": "Page", "members": [{"name": "value", "type": {"union": ["string", "number"]}}]}]
    path = tmp_path / "api.json"
    path.write_text(json.dumps(api), encoding="utf-8")
    assert main(["--strict-unions", str(path)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: [unsupported] Page.value: ")


def test_unreadable_input_exits_1(tmp_path: Path, capsys):
    assert main([str(tmp_path / "missing.json")]) == 1
    assert "error: [input]" in capsys.readouterr().err


def test_input_not_utf8_exits_1(tmp_path: Path, capsys):
    path = tmp_path / "api.json"
    path.write_bytes(b"\xff\xfe[]")
    assert main([str(path)]) == 1
    assert "error: [input] cannot read" in capsys.readouterr().err


def test_empty_members_key_in_yaml(tmp_path: Path, capsys):
    path = tmp_path / "api.yml"
    path.write_text("- name: Page\n  members:\n", encoding="utf-8")
    assert main([str(path)]) == 0
    assert "public interface IPage" in capsys.readouterr().out


def test_protocol_not_utf8_exits_1(tmp_path: Path, capsys):
    path = tmp_path / "protocol.yml"
    path.write_bytes(b"\xff\xfeFrame:\n")
    assert main(["--mode", "channels", str(path)]) == 1
    assert "error: [input] cannot read" in capsys.readouterr().err


def test_missing_template_exits_2(api_file: Path, tmp_path: Path):
    assert main(["--template", str(tmp_path / "none.cs"), str(api_file)]) == 2


def test_channels_mode(tmp_path: Path):
    path = tmp_path / "protocol.yml"
    path.write_text(PROTOCOL, encoding="utf-8")
    out_dir = tmp_path / "out"
    result = run_cli("--mode", "channels", "-o", str(out_dir), str(path))
    assert result.returncode == 0, result.stderr.decode()
    assert (out_dir / "channels" / "FrameChannel.cs").exists()
    assert (out_dir / "enums" / "StateEnum.cs").exists()
