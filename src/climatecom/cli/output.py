"""Terminal output: JSON, fixed-width tables and detail views."""

import json
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

MISSING = "N/A"
MAX_COLUMN_WIDTH = 40
COLUMN_SEPARATOR = "  "
ID_DISPLAY_LENGTH = 16


@dataclass(frozen=True)
class Column:
    """A table column or detail line, read from one record key."""

    key: str
    label: str
    format: Callable[[Any], str] | None = None

    def render(self, row: Any) -> str:
        value = row.get(self.key) if isinstance(row, Mapping) else None
        if self.format is not None:
            return self.format(value)
        if value is None:
            return MISSING
        return str(value)


# =============================================================================
# Value formatters
# =============================================================================


def _parse_time(value: Any) -> datetime | None:
    """Parse an ISO-8601 string or epoch milliseconds."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def short_id(value: Any) -> str:
    return str(value)[:ID_DISPLAY_LENGTH] if value else MISSING


def text(value: Any) -> str:
    return str(value) if value not in (None, "") else MISSING


def count(value: Any) -> str:
    return MISSING if value is None else str(value)


def acres(value: Any) -> str:
    """Format an area to two decimals."""
    if value is None:
        return MISSING
    try:
        return f"{float(value):.2f}"
    except (TypeError, ValueError):
        return str(value)


def area_acres(value: Any) -> str:
    formatted = acres(value)
    return formatted if formatted == MISSING else f"{formatted} acres"


def date(value: Any) -> str:
    if not value:
        return MISSING
    parsed = _parse_time(value)
    return parsed.date().isoformat() if parsed else str(value)


def timestamp(value: Any) -> str:
    if not value:
        return MISSING
    parsed = _parse_time(value)
    return parsed.strftime("%Y-%m-%d %H:%M") if parsed else str(value)


# =============================================================================
# Renderers
# =============================================================================


def render_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def column_widths(rows: Sequence[Any], columns: Sequence[Column]) -> list[int]:
    """Width per column: the widest of label and values, capped at 40."""
    widths = []
    for col in columns:
        width = len(col.label)
        for row in rows:
            width = max(width, len(col.render(row)))
        widths.append(min(width, MAX_COLUMN_WIDTH))
    return widths


def render_table(rows: Sequence[Any], columns: Sequence[Column]) -> str:
    """
    Render records as a fixed-width text table.

    Args:
        rows: Records to show, one per line
        columns: Columns in display order

    Returns:
        Header, dash rule, one line per row and a result count,
        or a single notice when there are no rows
    """
    if not rows:
        return "No results found."

    widths = column_widths(rows, columns)

    def line(cells: Sequence[str]) -> str:
        return COLUMN_SEPARATOR.join(cell[:w].ljust(w) for cell, w in zip(cells, widths))

    header = line([col.label for col in columns])
    lines = [header, "-" * len(header)]
    for row in rows:
        lines.append(line([col.render(row) for col in columns]))
    lines.append(f"{len(rows)} result(s)")
    return "\n".join(lines)


def render_details(title: str, record: Mapping[str, Any], fields: Sequence[Column]) -> str:
    """Render one record as aligned `Label: value` lines under a title."""
    width = max(len(f.label) for f in fields) + 1
    lines = [title, ""]
    for f in fields:
        lines.append(f"{f.label + ':':<{width}} {f.render(record)}")
    return "\n".join(lines)


# =============================================================================
# Printing
# =============================================================================


def print_json(data: Any) -> None:
    print(render_json(data))


def print_table(rows: Sequence[Any], columns: Sequence[Column]) -> None:
    print(render_table(rows, columns))


def print_success(message: str) -> None:
    print(f"[OK] {message}")


def print_error(message: str) -> None:
    print(f"[ERROR] {message}", file=sys.stderr)
