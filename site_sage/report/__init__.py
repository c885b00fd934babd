"""site_sage.report: serialisation of answer runs for the CLI."""

from __future__ import annotations

from site_sage.report.json_report import render_json

__all__ = ["render_json"]
