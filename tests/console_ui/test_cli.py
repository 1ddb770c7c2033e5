# tests/console_ui/test_cli.py
"""
Testes do CLI `laundry` (click) sobre um arquivo de configuração real.

Os testes asseguram que:
- sem argumento, os comandos orientam o uso e listam os jobs
- `create` conduz o wizard e persiste o job no arquivo de jobs
- `run` executa o job e sai com código 1 quando algo falha
- `destroy` exige confirmação pelo nome
- configuração ausente encerra com código 1
"""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from atlas_laundry.console_ui.cli import cli
from atlas_laundry.console_ui.renderers import NO_JOBS


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump({"store": {"path": str(tmp_path / "jobs.yaml")}}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def laundry(config_file: Path, monkeypatch):
    monkeypatch.delenv("LAUNDRY_LOCAL_CONFIG", raising=False)
    runner = CliRunner()

    def _invoke(*args: str, input=None):
        return runner.invoke(cli, ["--config", str(config_file), *args], input=input)

    return _invoke


def _create_fetch(laundry, data: Path):
    answers = ["File/JSON", str(data), "", "File/CSV", str(data), "", ""]
    return laundry("create", "fetch", input="\n".join(answers) + "\n")


def test_list_without_jobs(laundry):
    result = laundry("list")
    assert result.exit_code == 0
    assert NO_JOBS in result.output


def test_commands_without_argument_explain_usage(laundry):
    result = laundry("run")
    assert result.exit_code == 0
    assert "laundry run [job]" in result.output


def test_create_then_run(laundry, tmp_path: Path):
    data = tmp_path / "data"
    data.mkdir()
    (data / "fetch.json").write_text(json.dumps([{"id": 1}, {"id": 2}]), encoding="utf-8")

    created = _create_fetch(laundry, data)
    assert created.exit_code == 0, created.output
    assert "Cool, the job fetch is all set up!" in created.output

    stored = yaml.safe_load((tmp_path / "jobs.yaml").read_text(encoding="utf-8"))
    assert stored["jobs"][0]["input"] == {
        "type": "File.Json",
        "settings": {"directory": str(data), "filename": "fetch.json"},
    }
    assert stored["jobs"][0]["schedule"] is None

    listed = laundry("list")
    assert "fetch runs manually." in listed.output

    ran = laundry("run", "fetch")
    assert ran.exit_code == 0, ran.output
    assert "fetch: ok (2 items)" in ran.output
    assert (data / "fetch.csv").read_text(encoding="utf-8").splitlines() == ["id", "1", "2"]


def test_run_failure_exits_with_error(laundry, tmp_path: Path):
    data = tmp_path / "data"
    data.mkdir()
    _create_fetch(laundry, data)

    # fetch.json não existe
    result = laundry("run", "fetch")
    assert result.exit_code == 1
    assert "fetch: failed at fetch" in result.output


def test_run_unknown_job_exits_with_error(laundry):
    result = laundry("run", "ghost")
    assert result.exit_code == 1


def test_tick_with_nothing_due(laundry):
    result = laundry("tick")
    assert result.exit_code == 0
    assert "no jobs to run" in result.output


def test_destroy_requires_confirmation(laundry, tmp_path: Path):
    data = tmp_path / "data"
    data.mkdir()
    _create_fetch(laundry, data)

    kept = laundry("destroy", "fetch", input="nope\n")
    assert "Job fetch saved." in kept.output
    assert "fetch runs manually." in laundry("list").output

    gone = laundry("destroy", "fetch", input="FETCH\n")
    assert gone.exit_code == 0
    assert "Job fetch destroyed." in gone.output
    assert NO_JOBS in laundry("list").output


def test_missing_config_exits_with_error(tmp_path: Path):
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "absent.yaml"), "list"])
    assert result.exit_code == 1
