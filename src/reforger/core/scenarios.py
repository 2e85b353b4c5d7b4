"""
Reforger Server - Official Scenarios

Registry of the built-in multiplayer scenarios shipped with the game.
Single-player scenarios are not listed; they cannot be hosted.
"""

from dataclasses import dataclass, field

from reforger.core.identifiers import ScenarioId

# Scenario definitions - friendly code to scenario info
SCENARIO_REGISTRY: dict[str, "ScenarioDefinition"] = {}


@dataclass
class ScenarioDefinition:
    """Definition for an official scenario"""

    code: str  # Friendly code used by tools and the API
    key: str  # Constant-style name
    display_name: str
    resource_id: str
    path: str
    scenario: ScenarioId = field(init=False)

    def __post_init__(self) -> None:
        self.scenario = ScenarioId(resourceId=self.resource_id, path=self.path)
        # Register in global registry
        SCENARIO_REGISTRY[self.code] = self

    def to_dict(self) -> dict[str, str]:
        return {
            "code": self.code,
            "key": self.key,
            "displayName": self.display_name,
            "scenarioId": str(self.scenario),
        }


# ============================================================================
# Built-in Scenario Definitions
# ============================================================================

# Conflict
ScenarioDefinition(
    code="conflict-everon",
    key="CONFLICT_EVERON",
    display_name="Conflict Everon",
    resource_id="ECC61978EDCC2B5A",
    path="Missions/23_Campaign.conf",
)
ScenarioDefinition(
    code="conflict-northern-everon",
    key="CONFLICT_NORTHERN_EVERON",
    display_name="Conflict Northern Everon",
    resource_id="C700DB41F0C546E1",
    path="Missions/23_Campaign_NorthCentral.conf",
)
ScenarioDefinition(
    code="conflict-southern-everon",
    key="CONFLICT_SOUTHERN_EVERON",
    display_name="Conflict Southern Everon",
    resource_id="28802845ADA64D52",
    path="Missions/23_Campaign_SWCoast.conf",
)
ScenarioDefinition(
    code="conflict-western-everon",
    key="CONFLICT_WESTERN_EVERON",
    display_name="Conflict Western Everon",
    resource_id="94992A3D7CE4FF8A",
    path="Missions/23_Campaign_Western.conf",
)
ScenarioDefinition(
    code="conflict-montignac",
    key="CONFLICT_MONTIGNAC",
    display_name="Conflict Montignac",
    resource_id="FDE33AFE2ED7875B",
    path="Missions/23_Campaign_Montignac.conf",
)
ScenarioDefinition(
    code="conflict-arland",
    key="CONFLICT_ARLAND",
    display_name="Conflict Arland",
    resource_id="C41618FD18E9D714",
    path="Missions/23_Campaign_Arland.conf",
)

# Combat Ops
ScenarioDefinition(
    code="combat-ops-arland",
    key="COMBAT_OPS_ARLAND",
    display_name="Combat Ops Arland",
    resource_id="DAA03C6E6099D50F",
    path="Missions/24_CombatOps.conf",
)
ScenarioDefinition(
    code="combat-ops-everon",
    key="COMBAT_OPS_EVERON",
    display_name="Combat Ops Everon",
    resource_id="DFAC5FABD11F2390",
    path="Missions/26_CombatOpsEveron.conf",
)

# Game Master
ScenarioDefinition(
    code="game-master-everon",
    key="GAME_MASTER_EVERON",
    display_name="Game Master Everon",
    resource_id="59AD59368755F41A",
    path="Missions/21_GM_Eden.conf",
)
ScenarioDefinition(
    code="game-master-arland",
    key="GAME_MASTER_ARLAND",
    display_name="Game Master Arland",
    resource_id="2BBBE828037C6F4B",
    path="Missions/22_GM_Arland.conf",
)

# Tutorial
ScenarioDefinition(
    code="tutorial",
    key="TUTORIAL",
    display_name="Tutorial",
    resource_id="002AF7323E0129AF",
    path="Missions/Tutorial.conf",
)

# Capture & Hold
ScenarioDefinition(
    code="cah-briars",
    key="CAH_BRIARS",
    display_name="Capture & Hold: Briars Coast",
    resource_id="3F2E005F43DBD2F8",
    path="Missions/CAH_Briars_Coast.conf",
)
ScenarioDefinition(
    code="cah-castle",
    key="CAH_CASTLE",
    display_name="Capture & Hold: Castle",
    resource_id="F1A1BEA67132113E",
    path="Missions/CAH_Castle.conf",
)
ScenarioDefinition(
    code="cah-concrete-plant",
    key="CAH_CONCRETE_PLANT",
    display_name="Capture & Hold: Concrete Plant",
    resource_id="589945FB9FA7B97D",
    path="Missions/CAH_Concrete_Plant.conf",
)
ScenarioDefinition(
    code="cah-factory",
    key="CAH_FACTORY",
    display_name="Capture & Hold: Factory",
    resource_id="9405201CBD22A30C",
    path="Missions/CAH_Factory.conf",
)
ScenarioDefinition(
    code="cah-forest",
    key="CAH_FOREST",
    display_name="Capture & Hold: Forest",
    resource_id="1CD06B409C6FAE56",
    path="Missions/CAH_Forest.conf",
)
ScenarioDefinition(
    code="cah-le-moule",
    key="CAH_LE_MOULE",
    display_name="Capture & Hold: Le Moule",
    resource_id="7C491B1FCC0FF0E1",
    path="Missions/CAH_LeMoule.conf",
)
ScenarioDefinition(
    code="cah-military-base",
    key="CAH_MILITARY_BASE",
    display_name="Capture & Hold: Military Base",
    resource_id="6EA2E454519E5869",
    path="Missions/CAH_Military_Base.conf",
)
ScenarioDefinition(
    code="cah-morton",
    key="CAH_MORTON",
    display_name="Capture & Hold: Morton",
    resource_id="2B4183DF23E88249",
    path="Missions/CAH_Morton.conf",
)


DEFAULT_SCENARIO: ScenarioId = SCENARIO_REGISTRY["conflict-everon"].scenario


def get_scenario(code: str) -> ScenarioDefinition | None:
    """Look up a scenario definition by friendly code (case-insensitive)"""
    return SCENARIO_REGISTRY.get(code.strip().lower())


def scenario_from_code(code: str | None) -> ScenarioId | None:
    """Map a friendly code to its ScenarioId"""
    if not code:
        return None
    definition = get_scenario(code)
    return definition.scenario if definition else None


def list_scenarios() -> list[ScenarioDefinition]:
    """All registered scenarios in registration order"""
    return list(SCENARIO_REGISTRY.values())
