import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from transactions_view.cli import app, cmd_show

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # The root callback loads ./.env; run from an empty directory.
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def json_source(tmp_path: Path, transactions) -> Path:
    path = tmp_path / "transactions.json"
    payload = [tx.model_dump(mode="json") for tx in transactions]
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_show_defaults_to_first_page(json_source: Path):
    result = runner.invoke(app, ["show", "--source", str(json_source)])
    assert result.exit_code == 0, result.output
    assert "TXN-0001" in result.output
    assert "TXN-0011" not in result.output
    assert "Showing 1 to 10 of 25 results" in result.output


def test_show_query_sort_and_page(json_source: Path):
    result = runner.invoke(
        app,
        ["show", "--source", str(json_source), "-q", "pending", "--sort", "amount", "--page", "1"],
    )
    assert result.exit_code == 0, result.output
    assert "Amount ▲" in result.output
    assert "pending" in result.output
    assert "completed" not in result.output.split("\n", 2)[2]


def test_show_repeated_sort_toggles_direction(json_source: Path):
    result = runner.invoke(
        app, ["show", "--source", str(json_source), "--sort", "amount", "--sort", "amount"]
    )
    assert result.exit_code == 0, result.output
    assert "Amount ▼" in result.output
    # Highest amount (TXN-0025) leads in descending order.
    first_row = result.output.splitlines()[3]
    assert "TXN-0025" in first_row


def test_show_rejects_unknown_sort_column(json_source: Path):
    result = runner.invoke(app, ["show", "--source", str(json_source), "--sort", "merchant"])
    assert result.exit_code == 2
    assert "unknown sort column" in result.output


def test_show_out_of_range_page_warns_and_shows_first_page(json_source: Path):
    result = runner.invoke(app, ["show", "--source", str(json_source), "--page", "9"])
    assert result.exit_code == 0
    assert "page 9 is out of range (1-3)" in result.output
    assert "TXN-0001" in result.output


def test_show_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["show", "--source", str(tmp_path / "nope.json")])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_show_uses_mock_source_from_env():
    result = runner.invoke(
        app, ["show"], env={"TXN_VIEW_SOURCE": "mock", "TXN_VIEW_MOCK_COUNT": "12", "TXN_VIEW_MOCK_SEED": "9"}
    )
    assert result.exit_code == 0, result.output
    assert "(12 total transactions)" in result.output
    assert "Showing 1 to 10 of 12 results" in result.output


def test_invalid_config_exits_with_error():
    result = runner.invoke(app, ["show"], env={"TXN_VIEW_MOCK_COUNT": "lots"})
    assert result.exit_code == 2
    assert "TXN_VIEW_MOCK_COUNT must be an integer" in result.output


def test_chart_command():
    result = runner.invoke(app, ["chart", "--width", "36", "--height", "6"])
    assert result.exit_code == 0, result.output
    assert "$82k" in result.output
    assert result.output.count("*") == 12


def test_browse_requires_tty(json_source: Path):
    result = runner.invoke(app, ["browse", "--source", str(json_source)])
    assert result.exit_code == 1
    assert "interactive terminal" in result.output


def test_cmd_show_returns_exit_code(json_source: Path, capsys: pytest.CaptureFixture[str]):
    assert cmd_show(str(json_source), query="User 2", sort=["user"]) == 0
    out = capsys.readouterr().out
    assert "User ▲" in out
    assert "(7 total transactions)" in out
