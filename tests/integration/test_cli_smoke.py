import json
from pathlib import Path

import pytest

from langselect.cli import main, parse_args, run_command
from langselect.common.constants import EXIT_HARD_FAIL, EXIT_NO_MATCH, EXIT_SUCCESS

REPO_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


def _score(tmp_path: Path, *extra: str) -> tuple[int, dict]:
    output = tmp_path / "scores.json"
    args = parse_args(
        [
            "score",
            "--config-dir",
            str(REPO_CONFIG_DIR),
            "--output",
            str(output),
            "--run-id",
            "run-test",
            "--log-dir",
            str(tmp_path / "logs"),
            *extra,
        ]
    )
    exit_code = run_command(args)
    payload = json.loads(output.read_text(encoding="utf-8")) if output.exists() else {}
    return exit_code, payload


@pytest.mark.integration
def test_cli_scores_workspace_typescript_file(tmp_path: Path):
    exit_code, payload = _score(tmp_path, "--path", "/workspace/project/src/app.ts", "--language", "typescript")

    assert exit_code == EXIT_SUCCESS
    assert payload["candidate"]["language_id"] == "typescript"
    assert payload["scores"] == [
        {"score": 10, "selector": "typescript"},
        {"score": 10, "selector": "typescript-files"},
        {"score": 10, "selector": "workspace-sources"},
        {"score": 5, "selector": "any-language"},
        {"score": 0, "selector": "exclusive-python"},
        {"score": 0, "selector": "package-manifest"},
        {"score": 0, "selector": "untitled-markdown"},
    ]
    assert (tmp_path / "logs" / "run-test.log.jsonl").exists()


@pytest.mark.integration
def test_cli_unsynchronized_candidate_only_matches_opted_in_selectors(tmp_path: Path):
    exit_code, payload = _score(
        tmp_path,
        "--path",
        "/workspace/project/src/app.ts",
        "--language",
        "typescript",
        "--unsynchronized",
    )

    assert exit_code == EXIT_SUCCESS
    matched = [item["selector"] for item in payload["scores"] if item["score"] > 0]
    assert matched == ["workspace-sources"]


@pytest.mark.integration
def test_cli_reports_no_match(tmp_path: Path):
    exit_code, payload = _score(tmp_path, "--uri", "untitled:Untitled-1", "--language", "rust", "--unsynchronized")

    assert exit_code == EXIT_NO_MATCH
    assert all(item["score"] == 0 for item in payload["scores"])


@pytest.mark.integration
def test_cli_only_limits_selectors(tmp_path: Path):
    exit_code, payload = _score(
        tmp_path,
        "--uri",
        "untitled:Untitled-1",
        "--language",
        "markdown",
        "--only",
        "untitled-markdown",
        "any-language",
    )

    assert exit_code == EXIT_SUCCESS
    assert payload["scores"] == [
        {"score": 10, "selector": "untitled-markdown"},
        {"score": 5, "selector": "any-language"},
    ]


@pytest.mark.integration
def test_cli_check_and_config_failures(tmp_path: Path):
    assert main(["check", "--config-dir", str(REPO_CONFIG_DIR)]) == EXIT_SUCCESS
    assert main(["check", "--config-dir", str(tmp_path)]) == EXIT_HARD_FAIL
    assert main(["score", "--config-dir", str(REPO_CONFIG_DIR), "--language", "python"]) == EXIT_HARD_FAIL


@pytest.mark.integration
def test_cli_prints_scores_to_stdout(capsys):
    exit_code = main(["score", "--config-dir", str(REPO_CONFIG_DIR), "--path", "/srv/package.json", "--language", "json"])

    assert exit_code == EXIT_SUCCESS
    payload = json.loads(capsys.readouterr().out)
    assert payload["scores"][0] == {"selector": "package-manifest", "score": 10}


@pytest.mark.integration
def test_cli_logs_malformed_uri_as_candidate_error(tmp_path: Path):
    exit_code = main(
        [
            "score",
            "--config-dir",
            str(REPO_CONFIG_DIR),
            "--uri",
            "http://[::1",
            "--language",
            "x",
            "--run-id",
            "run-bad-uri",
            "--log-dir",
            str(tmp_path),
        ]
    )

    assert exit_code == EXIT_HARD_FAIL
    lines = (tmp_path / "run-bad-uri.log.jsonl").read_text(encoding="utf-8").splitlines()
    events = [json.loads(line) for line in lines]
    assert events[-1]["event"] == "SETUP_FAIL"
    assert events[-1]["error_code"] == "CANDIDATE_ERROR"
