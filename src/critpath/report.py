"""Presentation of computed schedules.

to_response() builds the result object consumed by the chart UI; the
render_* functions produce the text and Graphviz outputs of the CLI.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .config import EngineConfig
from .exceptions import CritpathError
from .models import ProjectSchedule
from .schemas import PertEdge, PertNode, PertResponse, PertSummary


def round_half_up(value: float, digits: int = 1) -> float:
    """Round for display, halves away from zero (2.25 -> 2.3)."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _format_number(value: float) -> str:
    """Drop a trailing .0 so whole days read as integers."""
    return f"{value:g}"


def to_response(schedule: ProjectSchedule, config: EngineConfig | None = None) -> PertResponse:
    """Convert a schedule into the PERT result object.

    Times are rounded for display; slack is recomputed from the rounded late
    and early starts so that the displayed numbers agree with each other.
    """
    digits = (config or EngineConfig()).round_digits

    nodes: list[PertNode] = []
    for entry in schedule.entries:
        duration = round_half_up(entry.duration, digits)
        es = round_half_up(entry.early_start, digits)
        ls = round_half_up(entry.late_start, digits)
        nodes.append(
            PertNode(
                id=entry.task_id,
                label=entry.name,
                name=entry.name,
                full_label=f"{entry.name} (D:{_format_number(duration)})",
                duration=duration,
                es=es,
                ef=round_half_up(entry.early_finish, digits),
                ls=ls,
                lf=round_half_up(entry.late_finish, digits),
                slack=round_half_up(ls - es, digits),
                critical=entry.is_critical,
            )
        )

    edges = [
        PertEdge(
            id=dep.id if dep.id is not None else f"e{i}",
            from_id=dep.predecessor_id,
            to_id=dep.successor_id,
            critical=schedule.is_critical_edge(dep),
        )
        for i, dep in enumerate(schedule.dependencies)
    ]

    return PertResponse(
        nodes=nodes,
        edges=edges,
        critical_path=list(schedule.critical_task_ids),
        project_duration=round_half_up(schedule.project_duration, digits),
        summary=PertSummary(
            total_tasks=len(schedule.entries),
            total_dependencies=len(schedule.dependencies),
            critical_tasks=len(schedule.critical_task_ids),
        ),
    )


def error_response(error: CritpathError) -> PertResponse:
    """Error-shaped result: message and code, empty chart, zero duration."""
    return PertResponse(error=str(error), error_code=type(error).__name__)


_TEXT_COLUMNS = ("ID", "Task", "Dur", "ES", "EF", "LS", "LF", "Slack", "Crit")


def render_text(response: PertResponse) -> str:
    """Render a result object as a fixed-width table."""
    if not response.ok:
        return f"Error: {response.error}\n"

    rows: list[tuple[str, ...]] = [_TEXT_COLUMNS]
    for node in response.nodes:
        rows.append(
            (
                node.id,
                node.label,
                *(
                    _format_number(v)
                    for v in (node.duration, node.es, node.ef, node.ls, node.lf, node.slack)
                ),
                "*" if node.critical else "",
            )
        )

    widths = [max(len(row[i]) for row in rows) for i in range(len(_TEXT_COLUMNS))]
    lines = ["  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip() for row in rows]
    lines.insert(1, "  ".join("-" * w for w in widths))

    lines.append("")
    lines.append(f"Project duration: {_format_number(response.project_duration)}")
    lines.append(f"Critical path: {' -> '.join(response.critical_path) or '(none)'}")
    return "\n".join(lines) + "\n"


def _escape_label(label: str) -> str:
    """Escape special characters in DOT labels."""
    return label.replace('"', '\\"').replace("\n", "\\n")


def render_dot(response: PertResponse) -> str:
    """Render a result object as a Graphviz digraph, critical path in red."""
    lines = ["digraph PertChart {"]
    lines.append("  rankdir=LR;")
    lines.append("  node [shape=box];")
    lines.append("")

    for node in response.nodes:
        label = "\\n".join(
            [
                _escape_label(node.label),
                f"D={_format_number(node.duration)} "
                f"ES={_format_number(node.es)} EF={_format_number(node.ef)}",
                f"LS={_format_number(node.ls)} LF={_format_number(node.lf)} "
                f"S={_format_number(node.slack)}",
            ]
        )
        attrs = [f'label="{label}"']
        if node.critical:
            attrs.extend(['color="red"', "penwidth=2"])
        lines.append(f'  "{node.id}" [{", ".join(attrs)}];')

    lines.append("")
    for edge in response.edges:
        attrs = ' [color="red", penwidth=2]' if edge.critical else ""
        lines.append(f'  "{edge.from_id}" -> "{edge.to_id}"{attrs};')

    lines.append("}")
    return "\n".join(lines) + "\n"
