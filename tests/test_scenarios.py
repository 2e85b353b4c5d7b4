from reforger.core.identifiers import ScenarioId, parse_resource_reference
from reforger.core.scenarios import (
    DEFAULT_SCENARIO,
    SCENARIO_REGISTRY,
    get_scenario,
    list_scenarios,
    scenario_from_code,
)

from conftest import CAMPAIGN_REFERENCE


def test_default_scenario_is_conflict_everon() -> None:
    assert str(DEFAULT_SCENARIO) == CAMPAIGN_REFERENCE
    assert isinstance(DEFAULT_SCENARIO, ScenarioId)


def test_get_scenario_is_case_insensitive() -> None:
    definition = get_scenario(" Conflict-Everon ")
    assert definition is not None
    assert definition.key == "CONFLICT_EVERON"


def test_unknown_codes() -> None:
    assert get_scenario("does-not-exist") is None
    assert scenario_from_code("does-not-exist") is None
    assert scenario_from_code(None) is None
    assert scenario_from_code("") is None


def test_scenario_from_code() -> None:
    scenario = scenario_from_code("tutorial")
    assert scenario is not None
    assert scenario.resourceId == "002AF7323E0129AF"


def test_registered_scenarios_are_well_formed() -> None:
    scenarios = list_scenarios()
    assert len(scenarios) == len(SCENARIO_REGISTRY) == 19
    assert len({s.key for s in scenarios}) == len(scenarios)

    for definition in scenarios:
        assert definition.scenario.is_valid_scenario_path()
        parsed = parse_resource_reference(str(definition.scenario))
        assert (parsed.resourceId, parsed.path) == (definition.resource_id, definition.path)


def test_to_dict() -> None:
    definition = get_scenario("cah-morton")
    assert definition is not None
    assert definition.to_dict() == {
        "code": "cah-morton",
        "key": "CAH_MORTON",
        "displayName": "Capture & Hold: Morton",
        "scenarioId": "{2B4183DF23E88249}Missions/CAH_Morton.conf",
    }
