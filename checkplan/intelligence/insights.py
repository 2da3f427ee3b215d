"""Human-readable summaries of a checklist context."""

from __future__ import annotations

from dataclasses import dataclass

from checkplan.models import AreaType, ChecklistContext, RiskLevel

LOW_RISK_CEILING = 40
MEDIUM_RISK_CEILING = 70


@dataclass(frozen=True)
class RiskLabel:
    label: str
    level: RiskLevel


def get_risk_label(risk_score: int) -> RiskLabel:
    """Display label for a project risk score."""
    if risk_score < LOW_RISK_CEILING:
        return RiskLabel("Low complexity", RiskLevel.LOW)
    if risk_score < MEDIUM_RISK_CEILING:
        return RiskLabel("Moderate risk", RiskLevel.MEDIUM)
    return RiskLabel("High risk - pay extra attention", RiskLevel.HIGH)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count > 1 else ''}"


def get_insight_bullets(context: ChecklistContext) -> list[str]:
    """Key findings to show alongside a plan, most critical first."""
    flags = context.derived_flags
    bullets = []

    if flags.has_structural:
        bullets.append("Structural elements detected")
    if flags.has_waterproofing_scope:
        bullets.append("Waterproofing / wet area scope detected")
    if flags.is_occupied_during_work:
        bullets.append("Occupied during work")
    if flags.includes_electrical_heavy:
        bullets.append("Heavy electrical scope")
    if flags.has_curbless_shower:
        bullets.append("Curbless shower (critical waterproofing)")
    if flags.has_steam_shower:
        bullets.append("Steam shower installation")

    kitchens = sum(1 for area in context.detected_areas if area.type is AreaType.KITCHEN)
    baths = sum(1 for area in context.detected_areas if area.type is AreaType.BATH)
    if kitchens or baths:
        parts = []
        if kitchens:
            parts.append(_plural(kitchens, "kitchen"))
        if baths:
            parts.append(_plural(baths, "bath"))
        bullets.append(f"Multi-area project: {', '.join(parts)}")

    return bullets
