from pathlib import Path

import pytest

from parselib import cli


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda config: None)


def _config(tmp_path: Path) -> Path:
    path = tmp_path / "Example.in"
    path.write_text("SOLVER REIMANN\nLPRESS 1025.232\nMAXITER 100000\n", encoding="utf-8")
    return path


def test_cli_dumps_dictionary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([str(_config(tmp_path))]) == 0
    out = capsys.readouterr().out
    assert "Dictionary Dump" in out
    assert "SOLVER: REIMANN" in out


def test_cli_prints_requested_values(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main([str(_config(tmp_path)), "--get", "float:LPRESS", "--get", "int:MAXITER"])
    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["1025.232", "100000"]


def test_cli_lookup_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([str(_config(tmp_path)), "--get", "int:SOLVER"]) == 2
    assert "stored as string" in capsys.readouterr().err


def test_cli_load_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([str(tmp_path / "missing.in")]) == 1
    assert "error:" in capsys.readouterr().err


def test_cli_rejects_bad_lookup_spec(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        cli.main([str(_config(tmp_path)), "--get", "list:X"])
