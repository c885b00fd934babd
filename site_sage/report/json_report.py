# site_sage/report/json_report.py

"""
JSON report of a question-answering run.
"""
from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict

from site_sage.engine import AnswerReport


def _finite(score: Any) -> Any:
    # NaN is not valid JSON
    if isinstance(score, float) and math.isnan(score):
        return None
    return score


def render_json(report: AnswerReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *report* as JSON at *output_path* and return the path.

    Example:
    ```python
    from site_sage.report.json_report import render_json
    report_path = render_json(report, 'reports/answer.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data: Dict[str, Any] = report.to_dict()
    for entry in data["scores"]:
        entry["score"] = _finite(entry["score"])

    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)

    return output
