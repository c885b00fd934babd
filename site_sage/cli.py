#!/usr/bin/env python3
"""
Command-line entry point for SiteSage.

Commands:
  ask QUESTION   Answer a question from the crawled domain (crawls on first use)
  crawl          Crawl the domain again and rewrite the CSV cache
  keywords PATH  Write the relevant tokens of every cached page to a CSV file
  config         Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (overrides the config's log_level)
  --log-file PATH     Also write logs to this file

Example:
  site_sage ask "What is a transformer?" --json answer.json
"""
import asyncio
import sys
from pathlib import Path
from typing import Optional

import click

from site_sage import __version__
from site_sage.config import LOG_LEVELS, SageConfig, load_config
from site_sage.engine import AnswerReport, Engine
from site_sage.errors import SiteSageError
from site_sage.logger import configure
from site_sage.relevance import save_relevant_tokens
from site_sage.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


async def run_ask(cfg: SageConfig, question: str, refresh: bool = False) -> AnswerReport:
    async with Engine(cfg) as engine:
        return await engine.ask(question, refresh=refresh)


async def run_crawl(cfg: SageConfig) -> int:
    async with Engine(cfg) as engine:
        result = await engine.crawl()
    return len(result.documents)


async def run_keywords(cfg: SageConfig, output: Path) -> Path:
    async with Engine(cfg) as engine:
        crawled = await engine.load_or_crawl()
        return await save_relevant_tokens(crawled.documents, engine.completion, output)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="SiteSage, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a YAML or JSON configuration file.",
)
@click.option(
    "--log-level", "log_level",
    default=None,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level.",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Log file (console only if omitted).",
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file):
    """SiteSage: answer questions from a single crawled website."""
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f"Failed to load configuration: {e}")
    configure(level=(log_level or cfg.log_level).upper(), log_file=log_file)
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command("ask", context_settings=CONTEXT_SETTINGS)
@click.argument("question")
@click.option("--refresh", is_flag=True, help="Ignore the CSV cache and crawl again.")
@click.option(
    "--json", "-j", "json_output",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also save the answer and all page scores as JSON.",
)
@click.pass_context
def ask(ctx, question: str, refresh: bool, json_output: Optional[Path]):
    """Answer QUESTION from the best-matching page of the domain."""
    cfg = ctx.obj["config"]
    try:
        report = asyncio.run(run_ask(cfg, question, refresh))
    except (SiteSageError, ValueError) as e:
        print_error(f"Error: {e}")

    click.echo(f"URL: {report.url}")
    click.echo(f"Question: {report.question}")
    click.echo(f"Answer: {report.answer}")

    if json_output:
        try:
            saved = render_json(report, json_output)
        except OSError as e:
            print_error(f"Failed to save JSON report: {e}")
        click.echo(f"JSON report: {saved}")


@cli.command("crawl", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def crawl(ctx):
    """Crawl the configured domain and rewrite the CSV cache."""
    cfg = ctx.obj["config"]
    click.echo(f"Crawling {cfg.start_url}")
    try:
        count = asyncio.run(run_crawl(cfg))
    except (SiteSageError, OSError) as e:
        print_error(f"Crawl failed: {e}")
    click.echo(f"Cached {count} pages in {cfg.cache_dir}")


@cli.command("keywords", context_settings=CONTEXT_SETTINGS)
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def keywords(ctx, output: Path):
    """Write the relevant tokens of every cached page to OUTPUT."""
    cfg = ctx.obj["config"]
    try:
        saved = asyncio.run(run_keywords(cfg, output))
    except (SiteSageError, ValueError, OSError) as e:
        print_error(f"Keyword extraction failed: {e}")
    click.echo(f"Relevant tokens: {saved}")


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj["config"]
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
