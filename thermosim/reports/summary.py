"""Analysis summary report generation for ThermoSim.

Produces text and HTML reports from an AnalysisRecord, summarising the
resolved states, the processes between them and the cycle metrics.
"""

from __future__ import annotations

import html as html_mod
from datetime import datetime, timezone
from typing import Any

from thermosim.core.config import AnalysisRecord, SolverOptions

# (key, label, unit) for state tables
_STATE_COLUMNS: tuple[tuple[str, str, str], ...] = (
    ("P", "P", "kPa"),
    ("T", "T", "°C"),
    ("v", "v", "m³/kg"),
    ("u", "u", "kJ/kg"),
    ("h", "h", "kJ/kg"),
    ("s", "s", "kJ/kg·K"),
    ("x", "x", "—"),
)

_RESULT_LABELS: dict[str, tuple[str, str]] = {
    "W_net": ("Net Work", "kJ/kg"),
    "Q_in": ("Heat In", "kJ/kg"),
    "Q_out": ("Heat Out", "kJ/kg"),
    "efficiency": ("Thermal Efficiency", "—"),
    "W_pump": ("Pump Work (in)", "kJ/kg"),
    "W_compressor": ("Compressor Work (in)", "kJ/kg"),
    "W_turbine": ("Turbine Work (out)", "kJ/kg"),
    "W": ("Work", "kJ/kg"),
    "Q": ("Heat", "kJ/kg"),
    "delta_u": ("Δu", "kJ/kg"),
}


def _title(record: AnalysisRecord) -> str:
    if record.kind == "cycle":
        return f"{record.cycle_type.title()} cycle — {record.substance}"
    return f"{record.kind.title()} — {record.substance}"


def _options_rows(record: AnalysisRecord) -> list[tuple[str, str]]:
    """Solver settings the record was computed with, empty if none were saved."""
    if not record.options:
        return []
    opts = SolverOptions.from_dict(record.options)
    return [
        ("Saturation lookup", opts.lookup.value),
        ("Strict units", "yes" if opts.strict_units else "no"),
        ("Corrected isothermal heat", "yes" if opts.corrected_isothermal_heat else "no"),
        ("Vapour cp", f"{opts.vapor_cp:g} kJ/kg·K"),
    ]


def _fmt(value: Any) -> str:
    if value is None:
        return "—"
    if isinstance(value, float):
        return f"{value:.4f}"
    return str(value)


# --- Plain-text report ---


def generate_text_report(record: AnalysisRecord) -> str:
    """Generate a plain-text analysis summary report.

    Args:
        record: AnalysisRecord with states, processes and results.

    Returns:
        Multi-line text report string.
    """
    lines: list[str] = []
    _hr = "=" * 72

    lines.append(_hr)
    lines.append("  ThermoSim — Analysis Report")
    lines.append(f"  {record.meta.name}: {_title(record)}")
    lines.append(_hr)
    lines.append("")

    if record.states:
        lines.append("STATES")
        lines.append("-" * 72)
        header = f"  {'':<28s}" + "".join(f"{label:>10s}" for _, label, _ in _STATE_COLUMNS)
        lines.append(header)
        for i, st in enumerate(record.states, start=1):
            name = st.get("name") or f"State {i}"
            row = f"  {name[:28]:<28s}" + "".join(
                f"{_fmt(st.get(key)):>10s}" for key, _, _ in _STATE_COLUMNS
            )
            lines.append(row)
        lines.append("")

    if record.processes:
        lines.append("PROCESSES")
        lines.append("-" * 72)
        for proc in record.processes:
            lines.append(
                f"  {proc['type']:<28s} W = {proc['W']:>10.3f} kJ/kg   Q = {proc['Q']:>10.3f} kJ/kg"
            )
        lines.append("")

    if record.results:
        lines.append("RESULTS")
        lines.append("-" * 72)
        for key, value in record.results.items():
            label, unit = _RESULT_LABELS.get(key, (key, ""))
            unit_str = f" {unit}" if unit and unit != "—" else ""
            lines.append(f"  {label:<24s} {value:>12.4f}{unit_str}")
        lines.append("")

    options = _options_rows(record)
    if options:
        lines.append("SOLVER OPTIONS")
        lines.append("-" * 72)
        for label, value in options:
            lines.append(f"  {label:<28s} {value}")
        lines.append("")

    lines.append(_hr)
    lines.append(f"  Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}")
    lines.append(f"  ThermoSim v{record.meta.version}")
    lines.append(_hr)

    return "\n".join(lines)


# --- HTML report ---


def generate_html_report(record: AnalysisRecord) -> str:
    """Generate an HTML analysis summary report.

    Produces a self-contained HTML document with inline CSS styling.
    """
    sections: list[str] = [_html_header(record)]

    if record.states:
        header = ("State", *(f"{label} [{unit}]" for _, label, unit in _STATE_COLUMNS))
        rows = [
            (st.get("name") or f"State {i}", *(_fmt(st.get(key)) for key, _, _ in _STATE_COLUMNS))
            for i, st in enumerate(record.states, start=1)
        ]
        sections.append(_html_table("States", header, rows))

    if record.processes:
        rows = [(p["type"], f"{p['W']:.3f}", f"{p['Q']:.3f}") for p in record.processes]
        sections.append(_html_table("Processes", ("Process", "W [kJ/kg]", "Q [kJ/kg]"), rows))

    if record.results:
        rows = []
        for key, value in record.results.items():
            label, unit = _RESULT_LABELS.get(key, (key, ""))
            rows.append((label, f"{value:.4f}", unit))
        sections.append(_html_table("Results", ("Quantity", "Value", "Unit"), rows))

    options = _options_rows(record)
    if options:
        sections.append(_html_table("Solver options", ("Setting", "Value"), options))

    sections.append(_html_footer(record))
    return "\n".join(sections)


def _html_header(record: AnalysisRecord) -> str:
    title = html_mod.escape(record.meta.name)
    subtitle = html_mod.escape(_title(record))
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>ThermoSim — {title}</title>
<style>
body {{ font-family: system-ui, sans-serif; max-width: 1040px; margin: 2em auto; padding: 0 1em; color: #1f2933; }}
h1 {{ color: #7b2d26; border-bottom: 3px solid #c0392b; padding-bottom: 0.25em; }}
h2 {{ color: #c0392b; margin-top: 1.4em; }}
table {{ border-collapse: collapse; margin: 0.5em 0 1.5em; min-width: 60%; }}
th, td {{ padding: 0.35em 0.9em; border-bottom: 1px solid #e4e7eb; }}
th {{ background: #fdf1ef; text-align: left; }}
td.num {{ text-align: right; font-family: ui-monospace, monospace; }}
.footer {{ margin-top: 2em; color: #9aa5b1; font-size: 0.85em; }}
</style>
</head>
<body>
<h1>ThermoSim &mdash; Analysis Report</h1>
<p><strong>{title}</strong>: {subtitle}</p>
"""


def _html_table(title: str, header: tuple[str, ...], rows: list[tuple[str, ...]]) -> str:
    """Section heading plus a table; the first column is a label, the rest numeric."""
    esc = html_mod.escape
    head = "".join(f"<th>{esc(h)}</th>" for h in header)
    body = [
        f"<tr><td>{esc(row[0])}</td>" + "".join(f'<td class="num">{esc(c)}</td>' for c in row[1:]) + "</tr>"
        for row in rows
    ]
    return "\n".join([f"<h2>{esc(title)}</h2>", "<table>", f"<tr>{head}</tr>", *body, "</table>"])


def _html_footer(record: AnalysisRecord) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    return f"""<div class="footer">
Generated: {ts} &middot; ThermoSim v{html_mod.escape(record.meta.version)}
</div>
</body>
</html>"""


def save_text_report(record: AnalysisRecord, filepath: str) -> None:
    """Generate and save a plain-text report to a file."""
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(generate_text_report(record))


def save_html_report(record: AnalysisRecord, filepath: str) -> None:
    """Generate and save an HTML report to a file."""
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(generate_html_report(record))
