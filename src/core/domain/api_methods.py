"""Catálogo de métodos de la API de EVE.

Por qué una tabla de datos:
- Cada método remoto tiene una forma fija de parámetros (pares keyID/vCode,
  characterID, ids, ...). Describirla como datos evita repartir comparaciones
  contra listas cerradas por todo el resolver.
- El resolver y la CLI consultan la misma fuente de verdad.

Nota:
- `access_mask` son los bits que una API key debe tener para poder llamar al
  método (valores oficiales de la API XML).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class APIMethodCategory(str, Enum):
    """Grupo al que pertenece un método (y el tipo de key que lo sirve)."""

    GENERIC = "generic"
    CHARACTER = "character"
    CORPORATION = "corporation"


class ExtraParameter(str, Enum):
    """Parámetros adicionales que un método añade a su forma base."""

    NONE = "none"
    IDS = "ids"
    NAMES = "names"
    CONTRACT_ID = "contractID"
    CHARACTER_AND_IDS = "characterID+ids"
    EXTENDED = "extended"
    ITEM_ID = "itemID"


class APIMethod(BaseModel):
    """Un método remoto y los metadatos que determinan sus parámetros."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    category: APIMethodCategory
    path: str = Field(..., min_length=1, description="Ruta relativa al proveedor.")
    access_mask: int = Field(default=0, ge=0)
    requires_api_key: bool = True
    parent: str | None = Field(
        default=None,
        description="Método cuya key hereda (solo métodos suplementarios).",
    )
    has_id_or_name: bool = False
    extra: ExtraParameter = ExtraParameter.NONE
    id_only_fallback: str | None = Field(
        default=None,
        description="Parámetro usado cuando no se dan credenciales externas.",
    )

    @property
    def is_supplemental(self) -> bool:
        return self.parent is not None

    def __str__(self) -> str:
        return self.name


def _generic(name: str, path: str, **kwargs) -> APIMethod:
    return APIMethod(name=name, category=APIMethodCategory.GENERIC, path=path, **kwargs)


def _character(name: str, path: str, mask: int, **kwargs) -> APIMethod:
    return APIMethod(
        name=name,
        category=APIMethodCategory.CHARACTER,
        path=path,
        access_mask=mask,
        **kwargs,
    )


def _corporation(name: str, path: str, mask: int, **kwargs) -> APIMethod:
    return APIMethod(
        name=name,
        category=APIMethodCategory.CORPORATION,
        path=path,
        access_mask=mask,
        **kwargs,
    )


_METHODS: tuple[APIMethod, ...] = (
    # Genéricos sin key
    _generic("ServerStatus", "/server/ServerStatus.xml.aspx", requires_api_key=False),
    _generic("CallList", "/api/CallList.xml.aspx", requires_api_key=False),
    _generic(
        "CharacterID",
        "/eve/CharacterID.xml.aspx",
        requires_api_key=False,
        has_id_or_name=True,
        extra=ExtraParameter.NAMES,
    ),
    _generic(
        "CharacterName",
        "/eve/CharacterName.xml.aspx",
        requires_api_key=False,
        has_id_or_name=True,
        extra=ExtraParameter.IDS,
    ),
    _generic(
        "TypeName",
        "/eve/TypeName.xml.aspx",
        requires_api_key=False,
        has_id_or_name=True,
        extra=ExtraParameter.IDS,
    ),
    _generic("RefTypes", "/eve/RefTypes.xml.aspx", requires_api_key=False),
    _generic("ConquerableStationList", "/eve/ConquerableStationList.xml.aspx", requires_api_key=False),
    _generic("EVEFactionalWarfareStats", "/eve/FacWarStats.xml.aspx", requires_api_key=False),
    _generic("FactionalWarfareSystems", "/map/FacWarSystems.xml.aspx", requires_api_key=False),
    # Genéricos de cuenta
    _generic("APIKeyInfo", "/account/APIKeyInfo.xml.aspx"),
    _generic("Characters", "/account/Characters.xml.aspx"),
    # Suplementarios: heredan la key de la lista de contratos
    _generic(
        "ContractItems",
        "/char/ContractItems.xml.aspx",
        parent="Contracts",
        has_id_or_name=True,
        extra=ExtraParameter.CONTRACT_ID,
    ),
    _generic("ContractBids", "/char/ContractBids.xml.aspx", parent="Contracts"),
    _generic(
        "CorporationContractItems",
        "/corp/ContractItems.xml.aspx",
        parent="CorporationContracts",
        has_id_or_name=True,
        extra=ExtraParameter.CONTRACT_ID,
    ),
    _generic(
        "CorporationContractBids",
        "/corp/ContractBids.xml.aspx",
        parent="CorporationContracts",
    ),
    # Personaje
    _character("AccountBalance", "/char/AccountBalance.xml.aspx", 1),
    _character("AssetList", "/char/AssetList.xml.aspx", 2),
    _character(
        "CalendarEventAttendees",
        "/char/CalendarEventAttendees.xml.aspx",
        4,
        has_id_or_name=True,
        extra=ExtraParameter.IDS,
    ),
    _character("CharacterSheet", "/char/CharacterSheet.xml.aspx", 8),
    _character("ContactList", "/char/ContactList.xml.aspx", 16),
    _character("ContactNotifications", "/char/ContactNotifications.xml.aspx", 32),
    _character("FactionalWarfareStats", "/char/FacWarStats.xml.aspx", 64),
    _character("IndustryJobs", "/char/IndustryJobs.xml.aspx", 128),
    _character("KillLog", "/char/KillLog.xml.aspx", 256),
    _character(
        "MailBodies",
        "/char/MailBodies.xml.aspx",
        512,
        has_id_or_name=True,
        extra=ExtraParameter.IDS,
    ),
    _character("MailingLists", "/char/MailingLists.xml.aspx", 1024),
    _character("MailMessages", "/char/MailMessages.xml.aspx", 2048),
    _character("MarketOrders", "/char/MarketOrders.xml.aspx", 4096),
    _character("Medals", "/char/Medals.xml.aspx", 8192),
    _character("Notifications", "/char/Notifications.xml.aspx", 16384),
    _character(
        "NotificationTexts",
        "/char/NotificationTexts.xml.aspx",
        32768,
        has_id_or_name=True,
        extra=ExtraParameter.IDS,
    ),
    _character("ResearchPoints", "/char/Research.xml.aspx", 65536),
    _character("SkillInTraining", "/char/SkillInTraining.xml.aspx", 131072),
    _character("SkillQueue", "/char/SkillQueue.xml.aspx", 262144),
    _character("Standings", "/char/Standings.xml.aspx", 524288),
    _character("UpcomingCalendarEvents", "/char/UpcomingCalendarEvents.xml.aspx", 1048576),
    _character("WalletJournal", "/char/WalletJournal.xml.aspx", 2097152),
    _character("WalletTransactions", "/char/WalletTransactions.xml.aspx", 4194304),
    # Público (8388608) o privado (16777216)
    _character(
        "CharacterInfo",
        "/eve/CharacterInfo.xml.aspx",
        8388608 | 16777216,
        id_only_fallback="characterID",
    ),
    _character("AccountStatus", "/account/AccountStatus.xml.aspx", 33554432),
    _character("Contracts", "/char/Contracts.xml.aspx", 67108864),
    _character(
        "Locations",
        "/char/Locations.xml.aspx",
        134217728,
        has_id_or_name=True,
        extra=ExtraParameter.IDS,
    ),
    # Corporación
    _corporation("CorporationAccountBalance", "/corp/AccountBalance.xml.aspx", 1),
    _corporation("CorporationAssetList", "/corp/AssetList.xml.aspx", 2),
    _corporation("CorporationMemberMedals", "/corp/MemberMedals.xml.aspx", 4),
    _corporation(
        "CorporationSheet",
        "/corp/CorporationSheet.xml.aspx",
        8,
        id_only_fallback="corporationID",
    ),
    _corporation("CorporationContactList", "/corp/ContactList.xml.aspx", 16),
    _corporation("CorporationContainerLog", "/corp/ContainerLog.xml.aspx", 32),
    _corporation("CorporationFactionalWarfareStats", "/corp/FacWarStats.xml.aspx", 64),
    _corporation("CorporationIndustryJobs", "/corp/IndustryJobs.xml.aspx", 128),
    _corporation("CorporationKillLog", "/corp/KillLog.xml.aspx", 256),
    _corporation("CorporationMemberSecurity", "/corp/MemberSecurity.xml.aspx", 512),
    _corporation("CorporationMemberSecurityLog", "/corp/MemberSecurityLog.xml.aspx", 1024),
    _corporation("CorporationMemberTrackingLimited", "/corp/MemberTracking.xml.aspx", 2048),
    _corporation("CorporationMarketOrders", "/corp/MarketOrders.xml.aspx", 4096),
    _corporation("CorporationMedals", "/corp/Medals.xml.aspx", 8192),
    _corporation("CorporationOutpostList", "/corp/OutpostList.xml.aspx", 16384),
    _corporation("CorporationOutpostServiceDetail", "/corp/OutpostServiceDetail.xml.aspx", 32768),
    _corporation("CorporationShareholders", "/corp/Shareholders.xml.aspx", 65536),
    _corporation(
        "CorporationStarbaseDetails",
        "/corp/StarbaseDetail.xml.aspx",
        131072,
        has_id_or_name=True,
        extra=ExtraParameter.ITEM_ID,
    ),
    _corporation("CorporationStandings", "/corp/Standings.xml.aspx", 262144),
    _corporation("CorporationStarbaseList", "/corp/StarbaseList.xml.aspx", 524288),
    _corporation("CorporationWalletJournal", "/corp/WalletJournal.xml.aspx", 1048576),
    _corporation("CorporationWalletTransactions", "/corp/WalletTransactions.xml.aspx", 2097152),
    _corporation("CorporationTitles", "/corp/Titles.xml.aspx", 4194304),
    _corporation("CorporationContracts", "/corp/Contracts.xml.aspx", 8388608),
    _corporation(
        "CorporationLocations",
        "/corp/Locations.xml.aspx",
        16777216,
        has_id_or_name=True,
        extra=ExtraParameter.CHARACTER_AND_IDS,
    ),
    _corporation(
        "CorporationMemberTrackingExtended",
        "/corp/MemberTracking.xml.aspx",
        33554432,
        extra=ExtraParameter.EXTENDED,
    ),
)

API_METHODS: dict[str, APIMethod] = {method.name: method for method in _METHODS}

SERVER_STATUS = API_METHODS["ServerStatus"]


def get_method(name: str) -> APIMethod:
    """Devuelve el método por nombre (sensible a mayúsculas)."""

    try:
        return API_METHODS[name]
    except KeyError:
        raise ValueError(f"Unknown API method: {name!r}") from None


def parent_of(method: APIMethod) -> APIMethod | None:
    """Método padre de un suplementario (cuya capacidad se exige a la key)."""

    if method.parent is None:
        return None
    return API_METHODS[method.parent]
