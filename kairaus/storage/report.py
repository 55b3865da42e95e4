"""Plain-text summaries of parsed files and investigation counts."""

from __future__ import annotations

from collections import Counter

from kairaus.harmonize.descriptions import describe
from kairaus.models.infra_file import InfraFile
from kairaus.models.investigation import Investigation
from kairaus.models.parsed import ParsedField
from kairaus.models.vocabulary import MethodToken


def _show(value: ParsedField) -> str:
    text = value.display()
    return text if text is not None else "-"


def render_counts(counts: Counter[MethodToken]) -> str:
    """One line per method, most common first."""
    if not counts:
        return "No investigations with a known method."
    lines = [f"Investigations: {sum(counts.values())}"]
    for token, n in counts.most_common():
        lines.append(f"  {token.value:<4} {n:>6}  {describe(token)}")
    return "\n".join(lines)


def _render_investigation(position: int, inv: Investigation) -> list[str]:
    token = inv.method.token
    method = _show(token)
    if token.is_parsed:
        method = f"{method} ({describe(token.value)})"

    lines = [
        f"[{position}] {method}",
        f"    point: {_show(inv.coordinates.point_id)}  "
        f"x={_show(inv.coordinates.x)} y={_show(inv.coordinates.y)} "
        f"z={_show(inv.coordinates.start_elevation)}  date: {_show(inv.coordinates.date)}",
        f"    observations: {len(inv.observations)}  "
        f"total depth: {inv.total_depth if inv.total_depth is not None else '-'}",
    ]
    if inv.termination.token.is_parsed:
        lines.append(f"    termination: {describe(inv.termination.token.value)}")
    if inv.soil_layers:
        layers = ", ".join(f"{layer.soil_type} {layer.thickness:g} m" for layer in inv.soil_layers)
        lines.append(f"    soil layers: {layers}")
    return lines


def render_file(infra: InfraFile) -> str:
    """Generate a summary string for one parsed file."""
    lines = [
        f"File: {infra.file_info.path or '<lines>'}",
        "=" * 50,
        f"Encoding: {infra.file_info.encoding or '-'}",
        f"Format: {_show(infra.format.version)}  "
        f"software: {_show(infra.format.used_software)} {_show(infra.format.software_version)}",
        f"Coordinate system: {infra.spatial.coordinate_system_or_unknown.value}",
        f"Elevation system: {infra.spatial.elevation_system_or_unknown.value}",
        "",
        render_counts(infra.count_investigations()),
    ]
    for position, inv in enumerate(infra.investigations):
        lines.append("")
        lines.extend(_render_investigation(position, inv))
    return "\n".join(lines)
