"""
Reforger Server - Data Models

Pydantic models mirroring the server's JSON configuration file. Field names
are the file's own camelCase keys.

Models only enforce shape and primitive types; value ranges and cross-field
rules are checked by ``reforger.core.validator``.
"""

import json
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    computed_field,
    field_validator,
    model_validator,
)

from reforger.config.constants import DEFAULT_RCON_ADDRESS
from reforger.core.identifiers import (
    MissionResourceReference,
    parse_resource_reference,
)
from reforger.utils.text_utils import build_workshop_url

# =============================================================================
# Enums
# =============================================================================


class SupportedPlatform(str, Enum):
    """Platforms a server can accept players from"""

    PC = "PLATFORM_PC"
    XBOX = "PLATFORM_XBL"
    PLAYSTATION = "PLATFORM_PSN"


class RconPermission(str, Enum):
    """Permission level granted to RCON clients"""

    ADMIN = "admin"
    MONITOR = "monitor"


# Snapshot semantics: frozen, unknown keys preserved for round-tripping
_SECTION_CONFIG = ConfigDict(frozen=True, extra="allow")


def _enum_value(v: Any) -> Any:
    return v.value if isinstance(v, Enum) else v


# =============================================================================
# Mods
# =============================================================================


class Mod(BaseModel):
    """Workshop mod entry"""

    model_config = _SECTION_CONFIG

    modId: StrictStr
    name: StrictStr | None = None
    version: StrictStr | None = None
    required: StrictBool | None = None


class ModExtended(Mod):
    """Mod with a derived workshop URL.

    The URL is computed on every read, so a copy with a different ``modId``
    never carries a stale URL.
    """

    @model_validator(mode="before")
    @classmethod
    def _drop_supplied_url(cls, data: Any) -> Any:
        if isinstance(data, dict) and "url" in data:
            return {k: v for k, v in data.items() if k != "url"}
        return data

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        return build_workshop_url(self.modId, self.name)


# =============================================================================
# Network Sections
# =============================================================================


class A2SConfig(BaseModel):
    """Steam query (server browser) endpoint"""

    model_config = _SECTION_CONFIG

    address: StrictStr = "0.0.0.0"
    port: StrictInt


class RconConfig(BaseModel):
    """Remote console settings. An empty password disables RCON."""

    model_config = _SECTION_CONFIG

    address: StrictStr = DEFAULT_RCON_ADDRESS
    port: StrictInt
    password: StrictStr = ""
    permission: StrictStr = RconPermission.ADMIN.value
    blacklist: list[StrictStr] = Field(default_factory=list)
    whitelist: list[StrictStr] = Field(default_factory=list)
    maxClients: StrictInt | None = Field(default=16, description="Concurrent RCON clients (1-16)")

    @field_validator("permission", mode="before")
    @classmethod
    def _permission_value(cls, v: Any) -> Any:
        return _enum_value(v)

    @property
    def enabled(self) -> bool:
        return bool(self.password)


# =============================================================================
# Game Sections
# =============================================================================


class GameProperties(BaseModel):
    """Gameplay and streaming properties"""

    model_config = _SECTION_CONFIG

    serverMaxViewDistance: StrictInt = Field(default=1600, description="Max view distance (m)")
    serverMinGrassDistance: StrictInt = Field(default=0, description="Grass distance, 0 or 50-150")
    networkViewDistance: StrictInt = Field(default=1500, description="Network replication range")
    disableThirdPerson: StrictBool = False
    fastValidation: StrictBool = True
    battlEye: StrictBool = True
    VONDisableUI: StrictBool = False
    VONDisableDirectSpeechUI: StrictBool = False
    VONCanTransmitCrossFaction: StrictBool | None = False
    missionHeader: dict[str, StrictStr | StrictBool | StrictInt | float] = Field(
        default_factory=dict
    )


class GameConfig(BaseModel):
    """Server identity, scenario and player settings"""

    model_config = _SECTION_CONFIG

    name: StrictStr
    password: StrictStr = ""
    passwordAdmin: StrictStr = ""
    admins: list[StrictStr] = Field(default_factory=list)
    scenarioId: StrictStr = Field(description="Scenario reference {RESOURCEID}path")
    maxPlayers: StrictInt = 64
    visible: StrictBool = True
    crossPlatform: StrictBool = False
    supportedPlatforms: list[StrictStr] = Field(
        default_factory=lambda: [SupportedPlatform.PC.value]
    )
    gameProperties: GameProperties = Field(default_factory=GameProperties)
    mods: list[Mod] = Field(default_factory=list)
    modsRequiredByDefault: StrictBool | None = True

    @field_validator("scenarioId", mode="before")
    @classmethod
    def _scenario_to_string(cls, v: Any) -> Any:
        """Accept MissionResourceReference objects as well as strings."""
        return str(v) if isinstance(v, MissionResourceReference) else v

    @field_validator("supportedPlatforms", mode="before")
    @classmethod
    def _platform_values(cls, v: Any) -> Any:
        return [_enum_value(p) for p in v] if isinstance(v, (list, tuple)) else v

    def scenario_reference(self) -> MissionResourceReference:
        """Parse ``scenarioId``; raises MalformedIdentifier when malformed."""
        return parse_resource_reference(self.scenarioId)


# =============================================================================
# Operating Section
# =============================================================================


class JoinQueueConfig(BaseModel):
    """Player join queue"""

    model_config = _SECTION_CONFIG

    maxSize: StrictInt = Field(default=0, description="Queue size (0-50), 0 disables")


class OperatingConfig(BaseModel):
    """Server runtime behaviour"""

    model_config = _SECTION_CONFIG

    lobbyPlayerSynchronise: StrictBool = True
    playerSaveTime: StrictInt = 120
    aiLimit: StrictInt = Field(default=-1, description="Max AI entities, -1 for unlimited")
    slotReservationTimeout: StrictInt = 60
    disableCrashReporter: StrictBool | None = False
    disableServerShutdown: StrictBool | None = False
    disableAI: StrictBool | None = False
    disableNavmeshStreaming: StrictBool | list[StrictStr] | None = None
    joinQueue: JoinQueueConfig | None = None


# =============================================================================
# Root Aggregate
# =============================================================================


class ServerConfig(BaseModel):
    """Complete server configuration snapshot.

    Instances are frozen; ``model_copy(update=...)`` derives a new one but does not
    validate the update, so untrusted values go through ``model_validate``.
    """

    model_config = _SECTION_CONFIG

    bindAddress: StrictStr
    bindPort: StrictInt
    publicAddress: StrictStr
    publicPort: StrictInt
    a2s: A2SConfig
    rcon: RconConfig
    game: GameConfig
    operating: OperatingConfig

    def to_dict(self) -> dict[str, Any]:
        """Dump to JSON-compatible data, omitting unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


# =============================================================================
# API Request/Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = "ok"
    version: str


class ModReferenceRequest(BaseModel):
    """Workshop URL or bare mod id to resolve"""

    reference: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "reference": "https://reforger.armaplatform.com/workshop/5965550F24A0C152-WhereAmI"
            }
        }
    )


class BulkModRequest(BaseModel):
    """Workshop URLs or mod ids to import"""

    urls: list[str]


class ModListResponse(BaseModel):
    """Imported mods; unrecognised references are counted, not listed"""

    mods: list[ModExtended]
    count: int
    skipped: int = 0


class DefaultConfigRequest(BaseModel):
    """Inputs for generating a default server configuration"""

    server_name: str = Field(min_length=1)
    scenario: str = Field(
        default="conflict-everon",
        description="Scenario code (see /scenarios) or {RESOURCEID}path reference",
    )
    bind_address: str | None = None
    bind_port: int | None = Field(default=None, ge=1, le=65535)
    cross_platform: bool = False
    rcon_password: str = ""
