"""
Reforger Server - Configuration Validation

Classifies problems in a well-typed ServerConfig into blocking errors and
advisory warnings.

The rule catalog is the ``RULES`` table. Every rule has a category, a
severity, the finding kind it produces, the field it inspects and a check
function returning zero or more hits. Evaluation is exhaustive and fixed:

1. Error rules run in table order.
2. Warning rules run in table order, skipping any rule whose field (or a
   field it depends on) already carries an error.

Checks never raise; they only report.
"""

import logging
import math
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from reforger.config.constants import (
    ADMINS_MAX_ENTRIES,
    AI_LIMIT_HIGH_IMPACT,
    COMMON_PASSWORDS,
    GAME_NAME_MAX_LENGTH,
    GRASS_DISTANCE_HIGH_IMPACT,
    GRASS_DISTANCE_MAX,
    GRASS_DISTANCE_MIN,
    JOIN_QUEUE_MAX,
    JOIN_QUEUE_MIN,
    NETWORK_VIEW_DISTANCE_MAX,
    NETWORK_VIEW_DISTANCE_RATIO,
    NETWORK_VIEW_DISTANCE_RATIO_MAX,
    NETWORK_VIEW_DISTANCE_RATIO_MIN,
    PLAYER_COUNT_MAX,
    PLAYER_COUNT_MIN,
    PLAYER_COUNT_RECOMMENDED_MAX,
    PORT_MAX,
    PORT_MIN,
    RCON_MAX_CLIENTS_MAX,
    RCON_MAX_CLIENTS_MIN,
    RCON_PASSWORD_MIN_LENGTH,
    RCON_PASSWORD_RECOMMENDED_LENGTH,
    RCON_PERMISSIONS,
    SLOT_RESERVATION_TIMEOUT_MAX,
    SLOT_RESERVATION_TIMEOUT_MIN,
    VIEW_DISTANCE_MAX,
    VIEW_DISTANCE_MINIMUM_RECOMMENDED,
    VIEW_DISTANCE_RECOMMENDED_MAX,
)
from reforger.config.models import ServerConfig, SupportedPlatform
from reforger.core.identifiers import (
    MalformedIdentifier,
    is_valid_mod_id,
    parse_resource_reference,
)
from reforger.core.mods import effective_mod_name
from reforger.utils.text_utils import mask_secret

logger = logging.getLogger(__name__)


# =============================================================================
# Finding Taxonomy
# =============================================================================


class ErrorKind(str, Enum):
    """Blocking problems. Structural kinds are produced by the parser."""

    # Structural
    INVALID_JSON = "INVALID_JSON"
    INVALID_STRUCTURE = "INVALID_STRUCTURE"
    MISSING_SECTION = "MISSING_SECTION"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_TYPE = "INVALID_TYPE"

    # Business rules
    MALFORMED_IDENTIFIER = "MALFORMED_IDENTIFIER"
    RCON_PASSWORD_TOO_SHORT = "RCON_PASSWORD_TOO_SHORT"
    RCON_PASSWORD_CONTAINS_SPACES = "RCON_PASSWORD_CONTAINS_SPACES"
    RCON_INVALID_PERMISSION = "RCON_INVALID_PERMISSION"
    RCON_MAX_CLIENTS_OUT_OF_RANGE = "RCON_MAX_CLIENTS_OUT_OF_RANGE"
    GAME_NAME_TOO_LONG = "GAME_NAME_TOO_LONG"
    ADMIN_PASSWORD_CONTAINS_SPACES = "ADMIN_PASSWORD_CONTAINS_SPACES"
    ADMINS_LIST_TOO_LONG = "ADMINS_LIST_TOO_LONG"
    MAX_PLAYERS_OUT_OF_RANGE = "MAX_PLAYERS_OUT_OF_RANGE"
    SERVER_VIEW_DISTANCE_OUT_OF_RANGE = "SERVER_VIEW_DISTANCE_OUT_OF_RANGE"
    NETWORK_VIEW_DISTANCE_OUT_OF_RANGE = "NETWORK_VIEW_DISTANCE_OUT_OF_RANGE"
    GRASS_DISTANCE_INVALID = "GRASS_DISTANCE_INVALID"
    SLOT_RESERVATION_TIMEOUT_OUT_OF_RANGE = "SLOT_RESERVATION_TIMEOUT_OUT_OF_RANGE"
    JOIN_QUEUE_MAX_SIZE_OUT_OF_RANGE = "JOIN_QUEUE_MAX_SIZE_OUT_OF_RANGE"
    INVALID_SUPPORTED_PLATFORM = "INVALID_SUPPORTED_PLATFORM"
    PORT_OUT_OF_RANGE = "PORT_OUT_OF_RANGE"


STRUCTURAL_ERROR_KINDS = frozenset(
    {
        ErrorKind.INVALID_JSON,
        ErrorKind.INVALID_STRUCTURE,
        ErrorKind.MISSING_SECTION,
        ErrorKind.MISSING_FIELD,
        ErrorKind.INVALID_TYPE,
    }
)


class WarningKind(str, Enum):
    """Advisory problems; the config is usable but risky or suboptimal."""

    WEAK_RCON_PASSWORD = "WEAK_RCON_PASSWORD"
    EMPTY_ADMIN_PASSWORD = "EMPTY_ADMIN_PASSWORD"
    PLAYER_COUNT_EXCEEDS_RECOMMENDED = "PLAYER_COUNT_EXCEEDS_RECOMMENDED"
    INVALID_MOD_ID = "INVALID_MOD_ID"
    DUPLICATE_MOD_ID = "DUPLICATE_MOD_ID"
    VIEW_DISTANCE_BELOW_MINIMUM = "VIEW_DISTANCE_BELOW_MINIMUM"
    VIEW_DISTANCE_EXCEEDS_RECOMMENDED = "VIEW_DISTANCE_EXCEEDS_RECOMMENDED"
    NETWORK_VIEW_DISTANCE_MISMATCH = "NETWORK_VIEW_DISTANCE_MISMATCH"
    GRASS_DISTANCE_HIGH_PERFORMANCE_IMPACT = "GRASS_DISTANCE_HIGH_PERFORMANCE_IMPACT"
    AI_LIMIT_HIGH_PERFORMANCE_IMPACT = "AI_LIMIT_HIGH_PERFORMANCE_IMPACT"
    PUBLIC_ADDRESS_MISMATCH = "PUBLIC_ADDRESS_MISMATCH"
    PORT_CONFLICT = "PORT_CONFLICT"


class Category(str, Enum):
    """Rule groups, declared in evaluation order"""

    REMOTE_ADMIN = "remote-admin"
    GAME = "game"
    GAME_PROPERTIES = "game-properties"
    OPERATING = "operating"
    PLATFORM = "platform"
    NETWORK = "network"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


# =============================================================================
# Findings
# =============================================================================


class ConfigError(BaseModel):
    """Blocking finding"""

    model_config = ConfigDict(frozen=True)

    type: ErrorKind
    message: str
    field: str | None = None
    value: Any = None
    validRange: str | None = None


class ConfigWarning(BaseModel):
    """Advisory finding"""

    model_config = ConfigDict(frozen=True)

    type: WarningKind
    message: str
    field: str | None = None
    value: Any = None
    recommendedValue: Any = None


class ValidationResult(BaseModel):
    """Classified outcome of one validation pass"""

    model_config = ConfigDict(frozen=True)

    errors: list[ConfigError] = Field(default_factory=list)
    warnings: list[ConfigWarning] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


# =============================================================================
# Rule Table
# =============================================================================


class Hit(NamedTuple):
    """One finding reported by a check, before it is tagged with its kind.

    ``detail`` becomes ``validRange`` for errors and ``recommendedValue`` for
    warnings. ``field`` overrides the rule's field for per-entry findings.
    """

    message: str
    value: Any = None
    detail: Any = None
    field: str | None = None


Check = Callable[[ServerConfig], Iterable[Hit]]


@dataclass(frozen=True)
class Rule:
    category: Category
    severity: Severity
    kind: ErrorKind | WarningKind
    field: str
    check: Check
    depends_on: tuple[str, ...] = ()

    @property
    def fields(self) -> tuple[str, ...]:
        return (self.field, *self.depends_on)


def _has_whitespace(text: str) -> bool:
    return any(ch.isspace() for ch in text)


def _outside(value: int, low: int, high: int) -> bool:
    return value < low or value > high


# ========== Remote admin ==========


def _rcon_password_too_short(config: ServerConfig) -> Iterator[Hit]:
    password = config.rcon.password
    if password and len(password) < RCON_PASSWORD_MIN_LENGTH:
        yield Hit(
            f"RCON password must be at least {RCON_PASSWORD_MIN_LENGTH} characters",
            mask_secret(password),
            f">= {RCON_PASSWORD_MIN_LENGTH} characters",
        )


def _rcon_password_spaces(config: ServerConfig) -> Iterator[Hit]:
    password = config.rcon.password
    if password and _has_whitespace(password):
        yield Hit(
            "RCON password cannot contain whitespace", mask_secret(password), "no whitespace"
        )


def _rcon_permission(config: ServerConfig) -> Iterator[Hit]:
    rcon = config.rcon
    if rcon.enabled and rcon.permission not in RCON_PERMISSIONS:
        yield Hit(
            f"RCON permission '{rcon.permission}' is not one of {', '.join(RCON_PERMISSIONS)}",
            rcon.permission,
            " | ".join(RCON_PERMISSIONS),
        )


def _rcon_max_clients(config: ServerConfig) -> Iterator[Hit]:
    rcon = config.rcon
    if (
        rcon.enabled
        and rcon.maxClients is not None
        and _outside(rcon.maxClients, RCON_MAX_CLIENTS_MIN, RCON_MAX_CLIENTS_MAX)
    ):
        yield Hit(
            f"RCON maxClients must be between {RCON_MAX_CLIENTS_MIN} and {RCON_MAX_CLIENTS_MAX}",
            rcon.maxClients,
            f"{RCON_MAX_CLIENTS_MIN}-{RCON_MAX_CLIENTS_MAX}",
        )


def _weak_rcon_password(config: ServerConfig) -> Iterator[Hit]:
    password = config.rcon.password
    if not password:
        return
    if len(password) < RCON_PASSWORD_RECOMMENDED_LENGTH:
        yield Hit(
            f"RCON password is shorter than {RCON_PASSWORD_RECOMMENDED_LENGTH} characters",
            mask_secret(password),
            f">= {RCON_PASSWORD_RECOMMENDED_LENGTH} characters",
        )
    elif password.lower() in COMMON_PASSWORDS:
        yield Hit(
            "RCON password is a commonly guessed value",
            mask_secret(password),
            "a unique password",
        )


# ========== Game ==========


def _scenario_identifier(config: ServerConfig) -> Iterator[Hit]:
    try:
        parse_resource_reference(config.game.scenarioId)
    except MalformedIdentifier as e:
        yield Hit(
            f"Scenario id is malformed: {e.reason}",
            config.game.scenarioId,
            "{RESOURCE_ID}path",
        )


def _game_name_length(config: ServerConfig) -> Iterator[Hit]:
    name = config.game.name
    if len(name) > GAME_NAME_MAX_LENGTH:
        yield Hit(
            f"Server name exceeds {GAME_NAME_MAX_LENGTH} characters",
            name,
            f"<= {GAME_NAME_MAX_LENGTH} characters",
        )


def _admin_password_spaces(config: ServerConfig) -> Iterator[Hit]:
    password = config.game.passwordAdmin
    if password and _has_whitespace(password):
        yield Hit(
            "Admin password cannot contain whitespace", mask_secret(password), "no whitespace"
        )


def _admins_count(config: ServerConfig) -> Iterator[Hit]:
    count = len(config.game.admins)
    if count > ADMINS_MAX_ENTRIES:
        yield Hit(
            f"Admins list has {count} entries, maximum is {ADMINS_MAX_ENTRIES}",
            count,
            f"<= {ADMINS_MAX_ENTRIES} entries",
        )


def _max_players_range(config: ServerConfig) -> Iterator[Hit]:
    players = config.game.maxPlayers
    if _outside(players, PLAYER_COUNT_MIN, PLAYER_COUNT_MAX):
        yield Hit(
            f"maxPlayers must be between {PLAYER_COUNT_MIN} and {PLAYER_COUNT_MAX}",
            players,
            f"{PLAYER_COUNT_MIN}-{PLAYER_COUNT_MAX}",
        )


def _empty_admin_password(config: ServerConfig) -> Iterator[Hit]:
    if not config.game.passwordAdmin.strip():
        yield Hit(
            "Admin password is empty; anyone can claim admin rights with #login",
            "",
            "a non-empty password",
        )


def _player_count_recommended(config: ServerConfig) -> Iterator[Hit]:
    players = config.game.maxPlayers
    if players > PLAYER_COUNT_RECOMMENDED_MAX:
        yield Hit(
            f"maxPlayers {players} exceeds the recommended {PLAYER_COUNT_RECOMMENDED_MAX}; "
            "expect degraded server performance",
            players,
            PLAYER_COUNT_RECOMMENDED_MAX,
        )


def _mod_id_format(config: ServerConfig) -> Iterator[Hit]:
    for index, mod in enumerate(config.game.mods):
        if not is_valid_mod_id(mod.modId):
            yield Hit(
                f"Mod '{effective_mod_name(mod)}' has a malformed id "
                "(expected 16 hexadecimal characters)",
                mod.modId,
                "16 hexadecimal characters",
                f"game.mods[{index}].modId",
            )


def _duplicate_mod_ids(config: ServerConfig) -> Iterator[Hit]:
    seen: set[str] = set()
    for index, mod in enumerate(config.game.mods):
        key = mod.modId.upper()
        if key in seen:
            yield Hit(
                f"Mod '{effective_mod_name(mod)}' is listed more than once",
                mod.modId,
                "remove the duplicate entry",
                f"game.mods[{index}].modId",
            )
        seen.add(key)


# ========== Game properties ==========


def _server_view_distance_range(config: ServerConfig) -> Iterator[Hit]:
    distance = config.game.gameProperties.serverMaxViewDistance
    if distance <= 0 or distance > VIEW_DISTANCE_MAX:
        yield Hit(
            f"serverMaxViewDistance must be greater than 0 and at most {VIEW_DISTANCE_MAX}",
            distance,
            f"(0, {VIEW_DISTANCE_MAX}]",
        )


def _network_view_distance_range(config: ServerConfig) -> Iterator[Hit]:
    distance = config.game.gameProperties.networkViewDistance
    if distance <= 0 or distance > NETWORK_VIEW_DISTANCE_MAX:
        yield Hit(
            "networkViewDistance must be greater than 0 and at most "
            f"{NETWORK_VIEW_DISTANCE_MAX}",
            distance,
            f"(0, {NETWORK_VIEW_DISTANCE_MAX}]",
        )


def _grass_distance(config: ServerConfig) -> Iterator[Hit]:
    distance = config.game.gameProperties.serverMinGrassDistance
    if distance != 0 and _outside(distance, GRASS_DISTANCE_MIN, GRASS_DISTANCE_MAX):
        yield Hit(
            f"serverMinGrassDistance must be 0 or between {GRASS_DISTANCE_MIN} "
            f"and {GRASS_DISTANCE_MAX}",
            distance,
            f"0 or {GRASS_DISTANCE_MIN}-{GRASS_DISTANCE_MAX}",
        )


def _view_distance_below_minimum(config: ServerConfig) -> Iterator[Hit]:
    distance = config.game.gameProperties.serverMaxViewDistance
    if distance < VIEW_DISTANCE_MINIMUM_RECOMMENDED:
        yield Hit(
            f"serverMaxViewDistance {distance} is below {VIEW_DISTANCE_MINIMUM_RECOMMENDED}; "
            "players will see objects pop in",
            distance,
            VIEW_DISTANCE_MINIMUM_RECOMMENDED,
        )


def _view_distance_recommended(config: ServerConfig) -> Iterator[Hit]:
    distance = config.game.gameProperties.serverMaxViewDistance
    if distance > VIEW_DISTANCE_RECOMMENDED_MAX:
        yield Hit(
            f"serverMaxViewDistance {distance} exceeds the recommended "
            f"{VIEW_DISTANCE_RECOMMENDED_MAX}; expect higher server load",
            distance,
            VIEW_DISTANCE_RECOMMENDED_MAX,
        )


def _network_view_distance_ratio(config: ServerConfig) -> Iterator[Hit]:
    props = config.game.gameProperties
    ratio = props.networkViewDistance / props.serverMaxViewDistance
    if not NETWORK_VIEW_DISTANCE_RATIO_MIN <= ratio <= NETWORK_VIEW_DISTANCE_RATIO_MAX:
        yield Hit(
            f"networkViewDistance {props.networkViewDistance} should be about "
            f"{int(NETWORK_VIEW_DISTANCE_RATIO * 100)}% of serverMaxViewDistance "
            f"{props.serverMaxViewDistance}",
            props.networkViewDistance,
            math.floor(props.serverMaxViewDistance * NETWORK_VIEW_DISTANCE_RATIO),
        )


def _grass_distance_impact(config: ServerConfig) -> Iterator[Hit]:
    distance = config.game.gameProperties.serverMinGrassDistance
    if distance > GRASS_DISTANCE_HIGH_IMPACT:
        yield Hit(
            f"serverMinGrassDistance {distance} above {GRASS_DISTANCE_HIGH_IMPACT} "
            "has a high performance impact",
            distance,
            GRASS_DISTANCE_HIGH_IMPACT,
        )


# ========== Operating ==========


def _slot_reservation_timeout(config: ServerConfig) -> Iterator[Hit]:
    timeout = config.operating.slotReservationTimeout
    if _outside(timeout, SLOT_RESERVATION_TIMEOUT_MIN, SLOT_RESERVATION_TIMEOUT_MAX):
        yield Hit(
            f"slotReservationTimeout must be between {SLOT_RESERVATION_TIMEOUT_MIN} "
            f"and {SLOT_RESERVATION_TIMEOUT_MAX} seconds",
            timeout,
            f"{SLOT_RESERVATION_TIMEOUT_MIN}-{SLOT_RESERVATION_TIMEOUT_MAX}",
        )


def _join_queue_size(config: ServerConfig) -> Iterator[Hit]:
    queue = config.operating.joinQueue
    if queue is not None and _outside(queue.maxSize, JOIN_QUEUE_MIN, JOIN_QUEUE_MAX):
        yield Hit(
            f"joinQueue.maxSize must be between {JOIN_QUEUE_MIN} and {JOIN_QUEUE_MAX}",
            queue.maxSize,
            f"{JOIN_QUEUE_MIN}-{JOIN_QUEUE_MAX}",
        )


def _ai_limit_impact(config: ServerConfig) -> Iterator[Hit]:
    limit = config.operating.aiLimit
    if limit > AI_LIMIT_HIGH_IMPACT:
        yield Hit(
            f"aiLimit {limit} above {AI_LIMIT_HIGH_IMPACT} has a high performance impact",
            limit,
            AI_LIMIT_HIGH_IMPACT,
        )


# ========== Platform ==========

_PLATFORM_VALUES = tuple(p.value for p in SupportedPlatform)


def _supported_platforms(config: ServerConfig) -> Iterator[Hit]:
    for index, platform in enumerate(config.game.supportedPlatforms):
        if platform not in _PLATFORM_VALUES:
            yield Hit(
                f"Unsupported platform '{platform}'",
                platform,
                " | ".join(_PLATFORM_VALUES),
                f"game.supportedPlatforms[{index}]",
            )


# ========== Network ==========


def _network_ports(config: ServerConfig) -> list[tuple[str, str, int]]:
    return [
        ("bindPort", "Bind port", config.bindPort),
        ("a2s.port", "A2S port", config.a2s.port),
        ("rcon.port", "RCON port", config.rcon.port),
    ]


def _port_range(config: ServerConfig) -> Iterator[Hit]:
    for field, label, port in _network_ports(config):
        if _outside(port, PORT_MIN, PORT_MAX):
            yield Hit(
                f"{label} must be between {PORT_MIN} and {PORT_MAX}",
                port,
                f"{PORT_MIN}-{PORT_MAX}",
                field,
            )


def _public_address_mismatch(config: ServerConfig) -> Iterator[Hit]:
    bind, public = config.bindAddress, config.publicAddress
    if bind != "0.0.0.0" and bind != public and "local" not in public.lower():
        yield Hit(
            f"publicAddress '{public}' differs from bindAddress '{bind}'; "
            "clients may be unable to connect",
            public,
            bind,
        )


def _port_conflicts(config: ServerConfig) -> Iterator[Hit]:
    ports = _network_ports(config)
    for i, (field, label, port) in enumerate(ports):
        for _, other_label, other_port in ports[:i]:
            if port == other_port:
                yield Hit(
                    f"{label} {port} conflicts with {other_label.lower()}",
                    port,
                    "distinct ports",
                    field,
                )
                break


_E, _W = Severity.ERROR, Severity.WARNING
_PROPS = "game.gameProperties"

# fmt: off
RULES: tuple[Rule, ...] = (
    # Remote admin
    Rule(Category.REMOTE_ADMIN, _E, ErrorKind.RCON_PASSWORD_TOO_SHORT, "rcon.password", _rcon_password_too_short),
    Rule(Category.REMOTE_ADMIN, _E, ErrorKind.RCON_PASSWORD_CONTAINS_SPACES, "rcon.password", _rcon_password_spaces),
    Rule(Category.REMOTE_ADMIN, _E, ErrorKind.RCON_INVALID_PERMISSION, "rcon.permission", _rcon_permission),
    Rule(Category.REMOTE_ADMIN, _E, ErrorKind.RCON_MAX_CLIENTS_OUT_OF_RANGE, "rcon.maxClients", _rcon_max_clients),
    Rule(Category.REMOTE_ADMIN, _W, WarningKind.WEAK_RCON_PASSWORD, "rcon.password", _weak_rcon_password),
    # Game
    Rule(Category.GAME, _E, ErrorKind.MALFORMED_IDENTIFIER, "game.scenarioId", _scenario_identifier),
    Rule(Category.GAME, _E, ErrorKind.GAME_NAME_TOO_LONG, "game.name", _game_name_length),
    Rule(Category.GAME, _E, ErrorKind.ADMIN_PASSWORD_CONTAINS_SPACES, "game.passwordAdmin", _admin_password_spaces),
    Rule(Category.GAME, _E, ErrorKind.ADMINS_LIST_TOO_LONG, "game.admins", _admins_count),
    Rule(Category.GAME, _E, ErrorKind.MAX_PLAYERS_OUT_OF_RANGE, "game.maxPlayers", _max_players_range),
    Rule(Category.GAME, _W, WarningKind.EMPTY_ADMIN_PASSWORD, "game.passwordAdmin", _empty_admin_password),
    Rule(Category.GAME, _W, WarningKind.PLAYER_COUNT_EXCEEDS_RECOMMENDED, "game.maxPlayers", _player_count_recommended),
    Rule(Category.GAME, _W, WarningKind.INVALID_MOD_ID, "game.mods", _mod_id_format),
    Rule(Category.GAME, _W, WarningKind.DUPLICATE_MOD_ID, "game.mods", _duplicate_mod_ids),
    # Game properties
    Rule(Category.GAME_PROPERTIES, _E, ErrorKind.SERVER_VIEW_DISTANCE_OUT_OF_RANGE, f"{_PROPS}.serverMaxViewDistance", _server_view_distance_range),
    Rule(Category.GAME_PROPERTIES, _E, ErrorKind.NETWORK_VIEW_DISTANCE_OUT_OF_RANGE, f"{_PROPS}.networkViewDistance", _network_view_distance_range),
    Rule(Category.GAME_PROPERTIES, _E, ErrorKind.GRASS_DISTANCE_INVALID, f"{_PROPS}.serverMinGrassDistance", _grass_distance),
    Rule(Category.GAME_PROPERTIES, _W, WarningKind.VIEW_DISTANCE_BELOW_MINIMUM, f"{_PROPS}.serverMaxViewDistance", _view_distance_below_minimum),
    Rule(Category.GAME_PROPERTIES, _W, WarningKind.VIEW_DISTANCE_EXCEEDS_RECOMMENDED, f"{_PROPS}.serverMaxViewDistance", _view_distance_recommended),
    Rule(Category.GAME_PROPERTIES, _W, WarningKind.NETWORK_VIEW_DISTANCE_MISMATCH, f"{_PROPS}.networkViewDistance", _network_view_distance_ratio,
         depends_on=(f"{_PROPS}.serverMaxViewDistance",)),
    Rule(Category.GAME_PROPERTIES, _W, WarningKind.GRASS_DISTANCE_HIGH_PERFORMANCE_IMPACT, f"{_PROPS}.serverMinGrassDistance", _grass_distance_impact),
    # Operating
    Rule(Category.OPERATING, _E, ErrorKind.SLOT_RESERVATION_TIMEOUT_OUT_OF_RANGE, "operating.slotReservationTimeout", _slot_reservation_timeout),
    Rule(Category.OPERATING, _E, ErrorKind.JOIN_QUEUE_MAX_SIZE_OUT_OF_RANGE, "operating.joinQueue.maxSize", _join_queue_size),
    Rule(Category.OPERATING, _W, WarningKind.AI_LIMIT_HIGH_PERFORMANCE_IMPACT, "operating.aiLimit", _ai_limit_impact),
    # Platform
    Rule(Category.PLATFORM, _E, ErrorKind.INVALID_SUPPORTED_PLATFORM, "game.supportedPlatforms", _supported_platforms),
    # Network
    Rule(Category.NETWORK, _E, ErrorKind.PORT_OUT_OF_RANGE, "bindPort", _port_range),
    Rule(Category.NETWORK, _W, WarningKind.PUBLIC_ADDRESS_MISMATCH, "publicAddress", _public_address_mismatch,
         depends_on=("bindAddress",)),
    Rule(Category.NETWORK, _W, WarningKind.PORT_CONFLICT, "bindPort", _port_conflicts,
         depends_on=("a2s.port", "rcon.port")),
)
# fmt: on


def _overlaps(a: str, b: str) -> bool:
    """True when one field path equals or contains the other"""
    if a == b:
        return True
    shorter, longer = sorted((a, b), key=len)
    return longer.startswith(shorter) and longer[len(shorter)] in ".["


# =============================================================================
# Engine
# =============================================================================


class ConfigValidator:
    """Runs a rule table against configurations"""

    def __init__(self, rules: Iterable[Rule] = RULES) -> None:
        self.rules = tuple(rules)
        self._error_rules = [r for r in self.rules if r.severity is Severity.ERROR]
        self._warning_rules = [r for r in self.rules if r.severity is Severity.WARNING]

    def validate(self, config: ServerConfig) -> ValidationResult:
        """Evaluate every rule and return all findings"""
        errors = [
            ConfigError(
                type=rule.kind,
                message=hit.message,
                field=hit.field or rule.field,
                value=hit.value,
                validRange=hit.detail,
            )
            for rule in self._error_rules
            for hit in rule.check(config)
        ]

        error_fields = [e.field for e in errors if e.field]
        warnings = [
            ConfigWarning(
                type=rule.kind,
                message=hit.message,
                field=hit.field or rule.field,
                value=hit.value,
                recommendedValue=hit.detail,
            )
            for rule in self._warning_rules
            if not self._blocked(rule, error_fields)
            for hit in rule.check(config)
        ]

        logger.debug(
            "Validated config '%s': %d error(s), %d warning(s)",
            config.game.name,
            len(errors),
            len(warnings),
        )
        return ValidationResult(errors=errors, warnings=warnings)

    @staticmethod
    def _blocked(rule: Rule, error_fields: list[str]) -> bool:
        return any(_overlaps(f, e) for f in rule.fields for e in error_fields)


_default_validator = ConfigValidator()


def validate(config: ServerConfig) -> ValidationResult:
    """Validate a configuration with the built-in rule table"""
    return _default_validator.validate(config)
