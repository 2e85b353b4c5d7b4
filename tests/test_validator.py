from collections.abc import Callable
from typing import Any

import pytest

from reforger.config.models import ServerConfig
from reforger.core.validator import (
    RULES,
    STRUCTURAL_ERROR_KINDS,
    Category,
    ConfigValidator,
    ErrorKind,
    Severity,
    ValidationResult,
    WarningKind,
    validate,
)

MakeConfig = Callable[..., ServerConfig]
_PROPS = "game__gameProperties__"

# One override set per rule kind that triggers it on the clean baseline
TRIGGERS: dict[ErrorKind | WarningKind, dict[str, Any]] = {
    ErrorKind.RCON_PASSWORD_TOO_SHORT: {"rcon__password": "ab"},
    ErrorKind.RCON_PASSWORD_CONTAINS_SPACES: {"rcon__password": "has space pw"},
    ErrorKind.RCON_INVALID_PERMISSION: {"rcon__permission": "root"},
    ErrorKind.RCON_MAX_CLIENTS_OUT_OF_RANGE: {"rcon__maxClients": 0},
    WarningKind.WEAK_RCON_PASSWORD: {"rcon__password": "short1"},
    ErrorKind.MALFORMED_IDENTIFIER: {"game__scenarioId": "Missions/23_Campaign.conf"},
    ErrorKind.GAME_NAME_TOO_LONG: {"game__name": "x" * 101},
    ErrorKind.ADMIN_PASSWORD_CONTAINS_SPACES: {"game__passwordAdmin": "admin pass"},
    ErrorKind.ADMINS_LIST_TOO_LONG: {"game__admins": [str(76561198000000000 + i) for i in range(21)]},
    ErrorKind.MAX_PLAYERS_OUT_OF_RANGE: {"game__maxPlayers": 0},
    WarningKind.EMPTY_ADMIN_PASSWORD: {"game__passwordAdmin": ""},
    WarningKind.PLAYER_COUNT_EXCEEDS_RECOMMENDED: {"game__maxPlayers": 97},
    WarningKind.INVALID_MOD_ID: {"game__mods": [{"modId": "1234"}]},
    WarningKind.DUPLICATE_MOD_ID: {
        "game__mods": [{"modId": "5965550F24A0C152"}, {"modId": "5965550f24a0c152"}]
    },
    ErrorKind.SERVER_VIEW_DISTANCE_OUT_OF_RANGE: {f"{_PROPS}serverMaxViewDistance": -1},
    ErrorKind.NETWORK_VIEW_DISTANCE_OUT_OF_RANGE: {f"{_PROPS}networkViewDistance": 6000},
    ErrorKind.GRASS_DISTANCE_INVALID: {f"{_PROPS}serverMinGrassDistance": 25},
    WarningKind.VIEW_DISTANCE_BELOW_MINIMUM: {
        f"{_PROPS}serverMaxViewDistance": 450,
        f"{_PROPS}networkViewDistance": 400,
    },
    WarningKind.VIEW_DISTANCE_EXCEEDS_RECOMMENDED: {f"{_PROPS}serverMaxViewDistance": 3000},
    WarningKind.NETWORK_VIEW_DISTANCE_MISMATCH: {f"{_PROPS}networkViewDistance": 500},
    WarningKind.GRASS_DISTANCE_HIGH_PERFORMANCE_IMPACT: {f"{_PROPS}serverMinGrassDistance": 120},
    ErrorKind.SLOT_RESERVATION_TIMEOUT_OUT_OF_RANGE: {"operating__slotReservationTimeout": 301},
    ErrorKind.JOIN_QUEUE_MAX_SIZE_OUT_OF_RANGE: {"operating__joinQueue": {"maxSize": 51}},
    WarningKind.AI_LIMIT_HIGH_PERFORMANCE_IMPACT: {"operating__aiLimit": 100},
    ErrorKind.INVALID_SUPPORTED_PLATFORM: {"game__supportedPlatforms": ["PLATFORM_SWITCH"]},
    ErrorKind.PORT_OUT_OF_RANGE: {"bindPort": 80, "publicPort": 80},
    WarningKind.PUBLIC_ADDRESS_MISMATCH: {
        "bindAddress": "192.168.1.10",
        "publicAddress": "203.0.113.5",
    },
    WarningKind.PORT_CONFLICT: {"rcon__port": 2001},
}


def kinds(result: ValidationResult) -> list[ErrorKind | WarningKind]:
    return [f.type for f in (*result.errors, *result.warnings)]


def test_baseline_is_clean(make_config: MakeConfig) -> None:
    result = validate(make_config())
    assert result.valid
    assert result.errors == []
    assert result.warnings == []


# =============================================================================
# Rule table
# =============================================================================


def test_every_business_kind_has_a_rule() -> None:
    rule_kinds = {rule.kind for rule in RULES}
    business_errors = set(ErrorKind) - STRUCTURAL_ERROR_KINDS
    assert rule_kinds == business_errors | set(WarningKind)
    assert set(TRIGGERS) == rule_kinds


@pytest.mark.parametrize("rule", RULES, ids=lambda r: r.kind.value)
def test_every_rule_is_reachable(rule, make_config: MakeConfig) -> None:
    result = validate(make_config(**TRIGGERS[rule.kind]))
    findings = result.errors if rule.severity is Severity.ERROR else result.warnings
    assert rule.kind in [f.type for f in findings]


def test_rule_severity_matches_kind() -> None:
    for rule in RULES:
        expected = ErrorKind if rule.severity is Severity.ERROR else WarningKind
        assert isinstance(rule.kind, expected)


def test_rules_are_ordered_by_category() -> None:
    order = list(Category)
    positions = [order.index(rule.category) for rule in RULES]
    assert positions == sorted(positions)


def test_errors_follow_category_order(make_config: MakeConfig) -> None:
    result = validate(
        make_config(
            bindPort=80,
            game__supportedPlatforms=["PLATFORM_SWITCH"],
            game__maxPlayers=0,
            rcon__password="ab",
        )
    )
    assert [e.type for e in result.errors] == [
        ErrorKind.RCON_PASSWORD_TOO_SHORT,
        ErrorKind.MAX_PLAYERS_OUT_OF_RANGE,
        ErrorKind.INVALID_SUPPORTED_PLATFORM,
        ErrorKind.PORT_OUT_OF_RANGE,
    ]


def test_custom_rule_subset(make_config: MakeConfig) -> None:
    validator = ConfigValidator([r for r in RULES if r.category is Category.GAME])
    result = validator.validate(make_config(game__maxPlayers=0, rcon__password="ab"))
    assert [e.type for e in result.errors] == [ErrorKind.MAX_PLAYERS_OUT_OF_RANGE]


# =============================================================================
# Properties
# =============================================================================


def test_validate_is_idempotent(make_config: MakeConfig) -> None:
    config = make_config(game__maxPlayers=150, game__passwordAdmin="", operating__aiLimit=100)
    assert validate(config) == validate(config)


def test_max_players_severity_is_monotonic(make_config: MakeConfig) -> None:
    assert kinds(validate(make_config(game__maxPlayers=64))) == []
    assert kinds(validate(make_config(game__maxPlayers=100))) == [
        WarningKind.PLAYER_COUNT_EXCEEDS_RECOMMENDED
    ]
    assert kinds(validate(make_config(game__maxPlayers=200))) == [
        ErrorKind.MAX_PLAYERS_OUT_OF_RANGE
    ]


@pytest.mark.parametrize(
    ("distance", "expected"),
    [
        (0, []),
        (50, []),
        (100, []),
        (49, [ErrorKind.GRASS_DISTANCE_INVALID]),
        (151, [ErrorKind.GRASS_DISTANCE_INVALID]),
        (101, [WarningKind.GRASS_DISTANCE_HIGH_PERFORMANCE_IMPACT]),
        (150, [WarningKind.GRASS_DISTANCE_HIGH_PERFORMANCE_IMPACT]),
    ],
)
def test_grass_distance_boundaries(
    distance: int, expected: list[ErrorKind | WarningKind], make_config: MakeConfig
) -> None:
    result = validate(make_config(**{f"{_PROPS}serverMinGrassDistance": distance}))
    assert kinds(result) == expected


def test_end_to_end_multiple_errors(make_config: MakeConfig) -> None:
    result = validate(
        make_config(
            game__maxPlayers=150,
            rcon__password="ab",
            **{f"{_PROPS}serverMaxViewDistance": 15000},
        )
    )
    error_kinds = {e.type for e in result.errors}
    assert {
        ErrorKind.MAX_PLAYERS_OUT_OF_RANGE,
        ErrorKind.RCON_PASSWORD_TOO_SHORT,
        ErrorKind.SERVER_VIEW_DISTANCE_OUT_OF_RANGE,
    } <= error_kinds

    error_fields = {e.field for e in result.errors}
    assert not any(w.field in error_fields for w in result.warnings)
    warning_kinds = {w.type for w in result.warnings}
    assert WarningKind.WEAK_RCON_PASSWORD not in warning_kinds
    assert WarningKind.PLAYER_COUNT_EXCEEDS_RECOMMENDED not in warning_kinds
    assert WarningKind.VIEW_DISTANCE_EXCEEDS_RECOMMENDED not in warning_kinds
    assert WarningKind.NETWORK_VIEW_DISTANCE_MISMATCH not in warning_kinds


# =============================================================================
# Remote admin
# =============================================================================


def test_empty_rcon_password_disables_rcon_checks(make_config: MakeConfig) -> None:
    result = validate(make_config(rcon__password="", rcon__permission="root", rcon__maxClients=99))
    assert kinds(result) == []


def test_rcon_password_findings_are_masked(make_config: MakeConfig) -> None:
    result = validate(make_config(rcon__password="bad pass"))
    [error] = result.errors
    assert error.type is ErrorKind.RCON_PASSWORD_CONTAINS_SPACES
    assert error.field == "rcon.password"
    assert error.value == "b******s"
    assert "bad pass" not in error.message


@pytest.mark.parametrize(
    ("password", "weak"),
    [("abc", True), ("abcdefg", True), ("password", True), ("ChangeMe", True), ("Str0ngRconPass", False)],
)
def test_weak_rcon_password(password: str, weak: bool, make_config: MakeConfig) -> None:
    result = validate(make_config(rcon__password=password))
    assert result.errors == []
    assert (WarningKind.WEAK_RCON_PASSWORD in kinds(result)) is weak


@pytest.mark.parametrize("clients", [1, 16])
def test_rcon_max_clients_bounds(clients: int, make_config: MakeConfig) -> None:
    assert validate(make_config(rcon__maxClients=clients)).errors == []


def test_rcon_max_clients_too_high(make_config: MakeConfig) -> None:
    [error] = validate(make_config(rcon__maxClients=17)).errors
    assert error.type is ErrorKind.RCON_MAX_CLIENTS_OUT_OF_RANGE
    assert error.validRange == "1-16"


# =============================================================================
# Game
# =============================================================================


def test_admin_password_with_spaces_suppresses_empty_warning(make_config: MakeConfig) -> None:
    result = validate(make_config(game__passwordAdmin="   "))
    assert kinds(result) == [ErrorKind.ADMIN_PASSWORD_CONTAINS_SPACES]


def test_admins_limit(make_config: MakeConfig) -> None:
    admins = [str(76561198000000000 + i) for i in range(20)]
    assert validate(make_config(game__admins=admins)).errors == []


def test_game_name_limit(make_config: MakeConfig) -> None:
    assert validate(make_config(game__name="x" * 100)).errors == []


def test_malformed_scenario(make_config: MakeConfig) -> None:
    [error] = validate(make_config(game__scenarioId="{XYZ}Missions/a.conf")).errors
    assert error.type is ErrorKind.MALFORMED_IDENTIFIER
    assert error.field == "game.scenarioId"


def test_mod_findings_point_at_entries(make_config: MakeConfig) -> None:
    mods = [
        {"modId": "5965550F24A0C152", "name": "WhereAmI"},
        {"modId": "1234", "name": "Broken"},
        {"modId": "5965550f24a0c152"},
        {"modId": "5965550F24A0C152"},
    ]
    result = validate(make_config(game__mods=mods))
    assert result.errors == []
    assert [(w.type, w.field) for w in result.warnings] == [
        (WarningKind.INVALID_MOD_ID, "game.mods[1].modId"),
        (WarningKind.DUPLICATE_MOD_ID, "game.mods[2].modId"),
        (WarningKind.DUPLICATE_MOD_ID, "game.mods[3].modId"),
    ]
    assert "Broken" in result.warnings[0].message


def test_each_bad_platform_is_reported(make_config: MakeConfig) -> None:
    result = validate(make_config(game__supportedPlatforms=["PLATFORM_PC", "PLATFORM_SWITCH", "pc"]))
    assert [(e.type, e.field) for e in result.errors] == [
        (ErrorKind.INVALID_SUPPORTED_PLATFORM, "game.supportedPlatforms[1]"),
        (ErrorKind.INVALID_SUPPORTED_PLATFORM, "game.supportedPlatforms[2]"),
    ]


# =============================================================================
# Game properties
# =============================================================================


@pytest.mark.parametrize(
    ("server", "network", "expected"),
    [
        (0, 1500, [ErrorKind.SERVER_VIEW_DISTANCE_OUT_OF_RANGE]),
        (10001, 1500, [ErrorKind.SERVER_VIEW_DISTANCE_OUT_OF_RANGE]),
        (10000, 5000, [WarningKind.VIEW_DISTANCE_EXCEEDS_RECOMMENDED]),
        (2500, 2250, []),
        (500, 450, []),
        (1600, 0, [ErrorKind.NETWORK_VIEW_DISTANCE_OUT_OF_RANGE]),
        (1600, 5001, [ErrorKind.NETWORK_VIEW_DISTANCE_OUT_OF_RANGE]),
    ],
)
def test_view_distance_bounds(
    server: int,
    network: int,
    expected: list[ErrorKind | WarningKind],
    make_config: MakeConfig,
) -> None:
    result = validate(
        make_config(
            **{f"{_PROPS}serverMaxViewDistance": server, f"{_PROPS}networkViewDistance": network}
        )
    )
    assert kinds(result) == expected


def test_network_view_distance_recommendation(make_config: MakeConfig) -> None:
    result = validate(
        make_config(
            **{f"{_PROPS}serverMaxViewDistance": 2000, f"{_PROPS}networkViewDistance": 500}
        )
    )
    [warning] = result.warnings
    assert warning.type is WarningKind.NETWORK_VIEW_DISTANCE_MISMATCH
    assert warning.recommendedValue == 1800
    assert warning.field == "game.gameProperties.networkViewDistance"


# =============================================================================
# Operating
# =============================================================================


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"operating__slotReservationTimeout": 5}, []),
        ({"operating__slotReservationTimeout": 300}, []),
        ({"operating__slotReservationTimeout": 4}, [ErrorKind.SLOT_RESERVATION_TIMEOUT_OUT_OF_RANGE]),
        ({"operating__joinQueue": {"maxSize": 0}}, []),
        ({"operating__joinQueue": {"maxSize": 50}}, []),
        ({"operating__joinQueue": {"maxSize": -1}}, [ErrorKind.JOIN_QUEUE_MAX_SIZE_OUT_OF_RANGE]),
        ({"operating__aiLimit": 80}, []),
        ({"operating__aiLimit": 81}, [WarningKind.AI_LIMIT_HIGH_PERFORMANCE_IMPACT]),
    ],
)
def test_operating_rules(
    overrides: dict[str, Any],
    expected: list[ErrorKind | WarningKind],
    make_config: MakeConfig,
) -> None:
    assert kinds(validate(make_config(**overrides))) == expected


# =============================================================================
# Network
# =============================================================================


@pytest.mark.parametrize(
    ("bind", "public", "warned"),
    [
        ("0.0.0.0", "203.0.113.5", False),
        ("192.168.1.10", "192.168.1.10", False),
        ("192.168.1.10", "localhost", False),
        ("192.168.1.10", "203.0.113.5", True),
    ],
)
def test_public_address_mismatch(
    bind: str, public: str, warned: bool, make_config: MakeConfig
) -> None:
    result = validate(make_config(bindAddress=bind, publicAddress=public))
    assert (WarningKind.PUBLIC_ADDRESS_MISMATCH in kinds(result)) is warned


def test_port_conflict_names_the_colliding_port(make_config: MakeConfig) -> None:
    [warning] = validate(make_config(a2s__port=2001)).warnings
    assert warning.type is WarningKind.PORT_CONFLICT
    assert warning.field == "a2s.port"


def test_port_out_of_range_suppresses_conflict(make_config: MakeConfig) -> None:
    result = validate(make_config(a2s__port=80, rcon__port=80))
    assert [(e.type, e.field) for e in result.errors] == [
        (ErrorKind.PORT_OUT_OF_RANGE, "a2s.port"),
        (ErrorKind.PORT_OUT_OF_RANGE, "rcon.port"),
    ]
    assert result.warnings == []
