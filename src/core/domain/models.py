"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde (JSON de personajes, XML de planes) sin
  acoplar el Core a librerías de I/O.
- Serialización estable para exportar.

Nota:
- Estos modelos describen *qué* es la información (personajes, keys, planes),
  no *cómo* se obtiene ni cómo se guarda.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from core.domain.api_methods import APIMethod, APIMethodCategory, parent_of


class APIKeyType(str, Enum):
    ACCOUNT = "account"
    CHARACTER = "character"
    CORPORATION = "corporation"


class APIKey(BaseModel):
    """Credencial de la API: par id/verification code con capacidades limitadas."""

    model_config = ConfigDict(frozen=True)

    key_id: int = Field(..., ge=0)
    verification_code: str = Field(..., min_length=1)
    type: APIKeyType = APIKeyType.CHARACTER
    access_mask: int = Field(default=0, ge=0)

    @property
    def is_character_or_account_type(self) -> bool:
        return self.type in (APIKeyType.ACCOUNT, APIKeyType.CHARACTER)

    def can_access(self, method: APIMethod) -> bool:
        """Indica si la key puede servir `method`.

        Reglas:
        - métodos de personaje: key de cuenta/personaje con el bit de acceso;
        - métodos de corporación: key de corporación con el bit de acceso;
        - suplementarios: se delega en el método padre;
        - genéricos de cuenta: cualquier key de cuenta/personaje.
        """

        if method.category is APIMethodCategory.CHARACTER:
            return self.is_character_or_account_type and bool(self.access_mask & method.access_mask)
        if method.category is APIMethodCategory.CORPORATION:
            return self.type is APIKeyType.CORPORATION and bool(self.access_mask & method.access_mask)

        parent = parent_of(method)
        if parent is not None:
            return self.can_access(parent)
        if method.requires_api_key:
            return self.is_character_or_account_type
        return True


class Skill(BaseModel):
    name: str = Field(..., min_length=1)
    level: int = Field(default=0, ge=0, le=5)
    skill_points: int = Field(default=0, ge=0)
    group: str | None = None
    is_public: bool = True


class Character(BaseModel):
    """Personaje almacenado: identidad, keys y datos exportables.

    Implementa `core.interfaces.credentials.CredentialSource`: el resolver solo
    consulta sus keys, nunca las copia ni las modifica.
    """

    name: str = Field(..., min_length=1, max_length=64)
    character_id: int = Field(..., ge=0)
    corporation_name: str | None = None
    corporation_id: int | None = None
    balance: float = 0.0
    api_keys: list[APIKey] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    ccp_xml: str | None = Field(
        default=None,
        description="Último CharacterSheet descargado de la API (caché XML).",
    )

    def find_api_key_with_access(self, method: APIMethod) -> APIKey | None:
        return next((key for key in self.api_keys if key.can_access(method)), None)

    def find_character_or_account_key(self) -> APIKey | None:
        return next((key for key in self.api_keys if key.is_character_or_account_type), None)

    @property
    def skill_points(self) -> int:
        return sum(skill.skill_points for skill in self.skills)

    def get_skill(self, name: str) -> Skill | None:
        return next((skill for skill in self.skills if skill.name == name), None)

    def after_plan(self, plan: Plan) -> Character:
        """Copia del personaje tal como quedaría al terminar `plan`."""

        skills = {skill.name: skill for skill in self.skills}
        for entry in plan.entries:
            current = skills.get(entry.skill_name)
            if current is None:
                skills[entry.skill_name] = Skill(name=entry.skill_name, level=entry.level)
            elif current.level < entry.level:
                skills[entry.skill_name] = current.model_copy(update={"level": entry.level})
        return self.model_copy(update={"skills": list(skills.values()), "ccp_xml": None})


class PlanEntry(BaseModel):
    skill_name: str = Field(..., min_length=1)
    level: int = Field(..., ge=1, le=5)
    priority: int = Field(default=3, ge=1, le=5)
    notes: str | None = None
    training_time: timedelta | None = None


class Plan(BaseModel):
    """Plan de entrenamiento: lista ordenada de (skill, nivel)."""

    name: str = Field(..., min_length=1)
    character_name: str | None = None
    description: str | None = None
    entries: list[PlanEntry] = Field(default_factory=list)

    def planned_level(self, skill_name: str) -> int:
        return max(
            (entry.level for entry in self.entries if entry.skill_name == skill_name),
            default=0,
        )

    def plan_to(self, skill_name: str, level: int, *, from_level: int = 0) -> None:
        """Añade los niveles que faltan hasta `level` (ya planeados se ignoran)."""

        start = max(self.planned_level(skill_name), from_level) + 1
        for lvl in range(start, level + 1):
            self.entries.append(PlanEntry(skill_name=skill_name, level=lvl))

    @property
    def total_training_time(self) -> timedelta:
        return sum(
            (entry.training_time for entry in self.entries if entry.training_time),
            timedelta(),
        )


class MarkupType(str, Enum):
    NONE = "none"
    FORUM = "forum"
    HTML = "html"


class PlanExportSettings(BaseModel):
    """Opciones del export a texto de un plan."""

    markup: MarkupType = MarkupType.NONE
    entry_number: bool = True
    entry_training_times: bool = False
    footer_count: bool = True
    footer_total_time: bool = False
