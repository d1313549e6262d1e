"""
Mode and format rendering (last stage of the shaping pipeline)

Mode is applied first and format second, so ``format='table'`` with
``mode='summary'`` renders the summary object rather than the raw array.
"""

import json
from typing import Any, Dict, List

from quiver_mcp.shaping.options import OutputFormat, ResponseMode

NO_DATA = "No data available"
SUMMARY_SAMPLE_SIZE = 5


def summarize(data: Any) -> Dict[str, Any]:
    """Replace data with a small overview: count, sample and field names."""
    if not isinstance(data, list):
        return {"type": "object", "preview": data}

    first_object = next((item for item in data if isinstance(item, dict)), None)
    return {
        "type": "array",
        "count": len(data),
        "sample": data[:SUMMARY_SAMPLE_SIZE],
        "fields": list(first_object.keys()) if first_object is not None else [],
    }


def to_compact_json(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def apply_mode(data: Any, mode: ResponseMode) -> Any:
    """JSON rendering: detailed passes through, compact serializes, summary summarizes."""
    if mode == ResponseMode.COMPACT:
        return to_compact_json(data)
    if mode == ResponseMode.SUMMARY:
        return summarize(data)
    return data


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return to_compact_json(value)
    return str(value)


def _rows(data: Any) -> List[Any]:
    # A single object (e.g. a summary) is rendered as a one-row table.
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return data
    return []


def _table_cell(value: Any) -> str:
    return _cell(value).replace("|", "\\|").replace("\n", " ")


def render_table(data: Any) -> str:
    """Markdown pipe table; header from the first row's keys in insertion order."""
    rows = _rows(data)
    if not rows:
        return NO_DATA

    first = rows[0]
    if not isinstance(first, dict):
        return "\n".join(f"| {_table_cell(item)} |" for item in rows)

    headers = list(first.keys())
    lines = [
        f"| {' | '.join(headers)} |",
        f"| {' | '.join('---' for _ in headers)} |",
    ]
    for item in rows:
        record = item if isinstance(item, dict) else {}
        lines.append(f"| {' | '.join(_table_cell(record.get(h)) for h in headers)} |")
    return "\n".join(lines)


def _csv_value(value: Any) -> str:
    text = _cell(value)
    if "," in text or '"' in text or "\n" in text or "\r" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def render_csv(data: Any) -> str:
    """CSV with a header row; values containing a comma, quote or line break are quoted."""
    rows = _rows(data)
    if not rows:
        return NO_DATA

    first = rows[0]
    if not isinstance(first, dict):
        return "\n".join(_csv_value(item) for item in rows)

    headers = list(first.keys())
    lines = [",".join(_csv_value(h) for h in headers)]
    for item in rows:
        record = item if isinstance(item, dict) else {}
        lines.append(",".join(_csv_value(record.get(h)) for h in headers))
    return "\n".join(lines)


def render(data: Any, fmt: OutputFormat, mode: ResponseMode) -> Any:
    """Apply mode then format."""
    if fmt == OutputFormat.JSON:
        return apply_mode(data, mode)

    # compact only changes JSON serialization; table and csv are already flat text
    if mode == ResponseMode.SUMMARY:
        data = summarize(data)

    if fmt == OutputFormat.TABLE:
        return render_table(data)
    return render_csv(data)
