"""
Reforger Server - Configuration Builder

Fluent accumulator over an in-progress server configuration. All construction
is delegated to ``reforger.core.defaults``. Field types are enforced when a
section is built (pydantic ValidationError); business rules are not checked.

Example:
    config = (
        ServerConfigBuilder("My Server", DEFAULT_SCENARIO)
        .set_bind_port(3001)
        .set_max_players(64)
        .set_rcon_password("s3cretRcon")
        .add_mods_from_urls(["https://reforger.armaplatform.com/workshop/5965550F24A0C152-WhereAmI"])
        .build()
    )
"""

from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import BaseModel

from reforger.config.constants import (
    A2S_PORT_OFFSET,
    DEFAULT_BIND_ADDRESS,
    DEFAULT_BIND_PORT,
    RCON_PORT_OFFSET,
)
from reforger.config.models import (
    A2SConfig,
    GameConfig,
    GameProperties,
    Mod,
    OperatingConfig,
    RconConfig,
    ServerConfig,
)
from reforger.core.defaults import (
    create_default_a2s_config,
    create_default_game_config,
    create_default_game_properties,
    create_default_operating_config,
    create_default_rcon_config,
)
from reforger.core.identifiers import MissionResourceReference
from reforger.core.mods import mod_list_from_urls, to_base_mod
from reforger.core.scenarios import DEFAULT_SCENARIO

DEFAULT_SERVER_NAME = "Default Server"

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _rebuild(model: _ModelT, update: dict[str, Any]) -> _ModelT:
    """Copy a section with updates, re-running strict field validation"""
    return type(model).model_validate({**model.model_dump(exclude_none=True), **update})


class ServerConfigBuilder:
    """Chainable builder for ServerConfig.

    The A2S and RCON ports follow the bind port (+1 / +2) until they are set
    explicitly; an explicit value is never overwritten by ``set_bind_port``.
    """

    def __init__(
        self,
        server_name: str | None = None,
        scenario_id: str | MissionResourceReference | None = None,
    ) -> None:
        self.reset()
        if server_name:
            self._server_name = server_name
        if scenario_id:
            self._scenario_id = str(scenario_id)

    # ========== Network ==========

    def set_bind_address(self, address: str) -> "ServerConfigBuilder":
        self._bind_address = address
        return self

    def set_bind_port(self, port: int) -> "ServerConfigBuilder":
        """Set the main game port; derived ports follow unless set explicitly"""
        self._bind_port = port
        return self

    def set_public_address(self, address: str) -> "ServerConfigBuilder":
        self._public_address = address
        return self

    def set_public_port(self, port: int) -> "ServerConfigBuilder":
        self._public_port = port
        return self

    def set_a2s_port(self, port: int) -> "ServerConfigBuilder":
        self._a2s_port = port
        return self

    def set_rcon_port(self, port: int) -> "ServerConfigBuilder":
        self._rcon_port = port
        return self

    # ========== Game ==========

    def set_server_name(self, name: str) -> "ServerConfigBuilder":
        self._server_name = name
        return self

    def set_scenario_id(self, scenario_id: str | MissionResourceReference) -> "ServerConfigBuilder":
        self._scenario_id = str(scenario_id)
        return self

    def set_max_players(self, max_players: int) -> "ServerConfigBuilder":
        self._max_players = max_players
        return self

    def set_cross_platform(self, enabled: bool) -> "ServerConfigBuilder":
        """PC only when disabled; PC, Xbox and PlayStation when enabled"""
        self._cross_platform = enabled
        return self

    def set_game_password(self, password: str) -> "ServerConfigBuilder":
        self._game_password = password
        return self

    def set_admin_password(self, password: str) -> "ServerConfigBuilder":
        self._admin_password = password
        return self

    def set_admins(self, admins: Iterable[str]) -> "ServerConfigBuilder":
        self._admins = list(admins)
        return self

    # ========== Mods ==========

    def set_mods(self, mods: Iterable[Mod]) -> "ServerConfigBuilder":
        self._mods = []
        return self.add_mods(mods)

    def add_mod(self, mod: Mod) -> "ServerConfigBuilder":
        """Append a mod, replacing any entry with the same modId in place"""
        mod = to_base_mod(mod)
        for index, existing in enumerate(self._mods):
            if existing.modId == mod.modId:
                self._mods[index] = mod
                return self
        self._mods.append(mod)
        return self

    def add_mods(self, mods: Iterable[Mod]) -> "ServerConfigBuilder":
        for mod in mods:
            self.add_mod(mod)
        return self

    def add_mods_from_urls(self, urls: Iterable[str]) -> "ServerConfigBuilder":
        """Add mods from workshop URLs; unrecognised URLs are skipped"""
        return self.add_mods(mod_list_from_urls(urls))

    def clear_mods(self) -> "ServerConfigBuilder":
        self._mods = []
        return self

    # ========== RCON ==========

    def set_rcon_password(self, password: str) -> "ServerConfigBuilder":
        self._rcon_password = password
        return self

    def set_rcon_address(self, address: str) -> "ServerConfigBuilder":
        self._rcon_address = address
        return self

    def set_rcon_permission(self, permission: str) -> "ServerConfigBuilder":
        self._rcon_permission = permission
        return self

    # ========== Operating ==========

    def set_player_save_time(self, seconds: int) -> "ServerConfigBuilder":
        self._player_save_time = seconds
        return self

    def set_ai_limit(self, limit: int) -> "ServerConfigBuilder":
        self._ai_limit = limit
        return self

    def set_join_queue_size(self, size: int | None) -> "ServerConfigBuilder":
        self._join_queue_size = size
        return self

    # ========== Build ==========

    def _derived_port(self, explicit: int | None, offset: int) -> int:
        if explicit is not None:
            return explicit
        if isinstance(self._bind_port, int) and not isinstance(self._bind_port, bool):
            return self._bind_port + offset
        # Left as given so the model rejects it
        return self._bind_port

    def build_a2s_config(self) -> A2SConfig:
        return _rebuild(
            create_default_a2s_config(DEFAULT_BIND_PORT),
            {"port": self.a2s_port},
        )

    def build_rcon_config(self) -> RconConfig:
        update: dict[str, Any] = {
            "port": self.rcon_port,
            "password": self._rcon_password,
            "permission": self._rcon_permission,
        }
        if self._rcon_address is not None:
            update["address"] = self._rcon_address
        return _rebuild(create_default_rcon_config(DEFAULT_BIND_PORT), update)

    def build_game_properties(self) -> GameProperties:
        return create_default_game_properties()

    def build_game_config(self) -> GameConfig:
        config = create_default_game_config(
            self._server_name, self._scenario_id, self._cross_platform
        )
        return _rebuild(
            config,
            {
                "password": self._game_password,
                "passwordAdmin": self._admin_password,
                "admins": list(self._admins),
                "maxPlayers": self._max_players,
                "gameProperties": self.build_game_properties(),
                "mods": list(self._mods),
            },
        )

    def build_operating_config(self) -> OperatingConfig:
        update: dict[str, Any] = {
            "playerSaveTime": self._player_save_time,
            "aiLimit": self._ai_limit,
        }
        if self._join_queue_size is not None:
            update["joinQueue"] = {"maxSize": self._join_queue_size}
        return _rebuild(create_default_operating_config(), update)

    def build(self) -> ServerConfig:
        """Assemble the complete configuration from the accumulated settings"""
        return ServerConfig(
            bindAddress=self._bind_address,
            bindPort=self._bind_port,
            publicAddress=self._public_address or self._bind_address,
            publicPort=self._public_port or self._bind_port,
            a2s=self.build_a2s_config(),
            rcon=self.build_rcon_config(),
            game=self.build_game_config(),
            operating=self.build_operating_config(),
        )

    def reset(self) -> "ServerConfigBuilder":
        """Return every setting to its default"""
        self._bind_address = DEFAULT_BIND_ADDRESS
        self._bind_port = DEFAULT_BIND_PORT
        self._public_address: str | None = None
        self._public_port: int | None = None
        self._a2s_port: int | None = None
        self._rcon_port: int | None = None
        self._server_name = DEFAULT_SERVER_NAME
        self._scenario_id = str(DEFAULT_SCENARIO)
        self._max_players = 64
        self._cross_platform = False
        self._game_password = ""
        self._admin_password = ""
        self._admins: list[str] = []
        self._mods: list[Mod] = []
        self._rcon_password = ""
        self._rcon_address: str | None = None
        self._rcon_permission = "admin"
        self._player_save_time = 120
        self._ai_limit = -1
        self._join_queue_size: int | None = None
        return self

    # Derived port previews
    @property
    def a2s_port(self) -> int:
        return self._derived_port(self._a2s_port, A2S_PORT_OFFSET)

    @property
    def rcon_port(self) -> int:
        return self._derived_port(self._rcon_port, RCON_PORT_OFFSET)
