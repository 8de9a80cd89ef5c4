"""Export de planes a texto (plano, BBCode de foro o HTML simple)."""

from __future__ import annotations

from adapters.templating import get_env
from core.domain.models import Plan, PlanExportSettings


def render_plan_text(plan: Plan, settings: PlanExportSettings, *, character_name: str | None = None) -> str:
    """Renderiza `plan` con las opciones ya recogidas del usuario."""

    template = get_env().get_template("plan.txt")
    return template.render(
        plan=plan,
        settings=settings,
        character_name=character_name or plan.character_name or "Unknown",
    )

