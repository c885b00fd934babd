# File: tests/test_cli.py
"""CLI tests with click.testing.CliRunner.

The pipeline coroutines are patched out, so no crawl or model call happens.
"""
import json

import pytest
import site_sage.cli as cli_module
from click.testing import CliRunner
from site_sage.cli import cli
from site_sage.config import API_KEY_ENV
from site_sage.crawler.models import SimilarityScore
from site_sage.engine import AnswerReport
from site_sage.errors import CompletionError
from site_sage.logger import configure


@pytest.fixture(autouse=True)
def isolate(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    yield
    # CliRunner swaps stderr; detach the handlers bound to it
    configure(level="WARNING")


@pytest.fixture()
def cfg_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "domain": "example.com",
                "start_url": "https://example.com",
                "openai_api_key": "sk-secret",
                "cache_dir": str(tmp_path),
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def patch_ask(monkeypatch):
    calls = []

    async def fake_ask(cfg, question, refresh=False):
        calls.append((cfg, question, refresh))
        return AnswerReport(
            question=question,
            url="https://example.com/docs",
            answer="Forty-two.",
            scores=[SimilarityScore("https://example.com/docs", 0.9), SimilarityScore("https://example.com/", 0.2)],
        )

    monkeypatch.setattr(cli_module, "run_ask", fake_ask)
    return calls


def test_cli_module_exposes_pipeline_coroutines():
    # the package must not shadow the module with the click group
    assert cli_module.cli is cli
    for name in ("run_ask", "run_crawl", "run_keywords"):
        assert callable(getattr(cli_module, name))


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SiteSage" in result.output


def test_ask_prints_url_question_answer(cfg_file, patch_ask):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "ask", "What is the answer?"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "URL: https://example.com/docs" in lines
    assert "Question: What is the answer?" in lines
    assert "Answer: Forty-two." in lines
    (cfg, question, refresh), = patch_ask
    assert cfg.domain == "example.com"
    assert question == "What is the answer?"
    assert refresh is False


def test_ask_refresh_flag(cfg_file, patch_ask):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "ask", "q", "--refresh"])
    assert result.exit_code == 0
    assert patch_ask[0][2] is True


def test_ask_json_report(tmp_path, cfg_file, patch_ask):
    out = tmp_path / "out" / "answer.json"
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "ask", "q", "--json", str(out)])

    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["answer"] == "Forty-two."
    assert [s["url"] for s in data["scores"]] == ["https://example.com/docs", "https://example.com/"]


def test_ask_requires_question(cfg_file, patch_ask):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "ask"])
    assert result.exit_code != 0
    assert patch_ask == []


def test_ask_service_failure_exits_non_zero(cfg_file, monkeypatch):
    async def broken(cfg, question, refresh=False):
        raise CompletionError("Completion request failed: quota")

    monkeypatch.setattr(cli_module, "run_ask", broken)
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "ask", "q"])

    assert result.exit_code == 1
    assert "quota" in result.output


def test_ask_without_api_key_exits_non_zero(tmp_path, monkeypatch):
    # no patching: the engine builds the OpenAI client and finds no key
    (tmp_path / "contents.csv").write_text("URL,Content\nhttps://x.com/,hello\n", encoding="utf-8")
    (tmp_path / "crawled_urls.csv").write_text("URL\nhttps://x.com/\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["ask", "q"])
    assert result.exit_code == 1
    assert API_KEY_ENV in result.output


def test_crawl_command(cfg_file, monkeypatch):
    async def fake_crawl(cfg):
        return 7

    monkeypatch.setattr(cli_module, "run_crawl", fake_crawl)
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "crawl"])
    assert result.exit_code == 0
    assert "Cached 7 pages" in result.output


def test_keywords_command(tmp_path, cfg_file, monkeypatch):
    async def fake_keywords(cfg, output):
        return output

    monkeypatch.setattr(cli_module, "run_keywords", fake_keywords)
    out = tmp_path / "relevant.csv"
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "keywords", str(out)])
    assert result.exit_code == 0
    assert str(out) in result.output


def test_show_config_masks_secret(cfg_file):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["domain"] == "example.com"
    assert "sk-secret" not in result.output


def test_bad_config_file(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("timeout: -1\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(bad), "config"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_unknown_log_level_in_config_file(tmp_path):
    bad = tmp_path / "levels.yaml"
    bad.write_text("log_level: FOO\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(bad), "config"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output
    assert "log_level" in result.output
