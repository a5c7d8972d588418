"""Output formatters for outlooks."""

import json

from quemepongo.config.defaults import VARIABLE_UNITS
from quemepongo.models.outlook import Outlook


def _fmt(value: float | None, unit: str, precision: int = 1) -> str:
    if value is None:
        return "--"
    return f"{value:.{precision}f}{unit}"


def format_outlook_text(o: Outlook, place: str = "") -> str:
    """Plain text outlook for the terminal."""
    title = f"=== Outlook next {o.hours_ahead}h"
    if place:
        title += f" | {place}"
    lines = [title + " ==="]

    for name, reason in o.errors.items():
        lines.append(f"! {name} unavailable: {reason}")

    if o.aligned is not None:
        unit = VARIABLE_UNITS.get(o.aligned.variable, "")
        lines.append(f"{'Hour':<6} {'Forecast':>10} {'Projection':>11}")
        for label, fc, pr in zip(o.aligned.labels, o.aligned.forecast, o.aligned.projection):
            lines.append(
                f"{label:%H:%M}  {_fmt(fc, unit):>10} {_fmt(pr, unit):>11}"
            )

    if o.summary:
        unit = VARIABLE_UNITS.get(o.aligned.variable, "") if o.aligned else ""
        lines.append("-- Summary --")
        for row in o.summary:
            badge = f" [{row.badge.value} {row.diff:+.1f}]" if row.badge else ""
            lines.append(
                f"{row.time:%H:%M}  forecast {_fmt(row.forecast, unit, 0)}"
                f"  projection {_fmt(row.projection, unit, 0)}{badge}"
            )

    if o.recommendations:
        lines.append("-- What to wear --")
        for r in o.recommendations:
            lines.append(f"* {r.condition}: {r.clothing}")
    return "\n".join(lines)


def format_outlook_json(o: Outlook) -> str:
    """JSON outlook for programmatic consumption."""
    return json.dumps(o.to_dict(), indent=2, ensure_ascii=False)
