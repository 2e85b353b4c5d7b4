"""
Reforger Server - Default Configuration Factory

Builds fully populated configuration sections from minimal inputs. Nothing
here validates; route results through ``reforger.core.validator`` when the
inputs come from a user.
"""

from reforger.config.constants import (
    A2S_PORT_OFFSET,
    DEFAULT_BIND_ADDRESS,
    DEFAULT_BIND_PORT,
    DEFAULT_RCON_ADDRESS,
    RCON_PORT_OFFSET,
)
from reforger.config.models import (
    A2SConfig,
    GameConfig,
    GameProperties,
    OperatingConfig,
    RconConfig,
    ServerConfig,
    SupportedPlatform,
)
from reforger.core.identifiers import MissionResourceReference


def create_default_mission_header() -> dict[str, str]:
    """Placeholder mission header values"""
    return {
        "m_sName": "Default Mission",
        "m_sAuthor": "Default Author",
        "m_sSaveFileName": "defaultSave",
    }


def create_default_a2s_config(base_port: int) -> A2SConfig:
    """A2S query endpoint on base_port + 1"""
    return A2SConfig(address="0.0.0.0", port=base_port + A2S_PORT_OFFSET)


def create_default_rcon_config(base_port: int, password: str = "") -> RconConfig:
    """RCON on base_port + 2. An empty password leaves RCON disabled."""
    return RconConfig(
        address=DEFAULT_RCON_ADDRESS,
        port=base_port + RCON_PORT_OFFSET,
        password=password,
        permission="admin",
        blacklist=[],
        whitelist=[],
        maxClients=16,
    )


def create_default_game_properties() -> GameProperties:
    return GameProperties(missionHeader=create_default_mission_header())


def create_default_game_config(
    name: str,
    scenario_id: str | MissionResourceReference,
    cross_platform: bool = False,
) -> GameConfig:
    """
    Game section with server identity and scenario.

    Args:
        name: Server display name
        scenario_id: Scenario reference string or object
        cross_platform: Accept Xbox and PlayStation players as well as PC
    """
    platforms = (
        [SupportedPlatform.PC, SupportedPlatform.XBOX, SupportedPlatform.PLAYSTATION]
        if cross_platform
        else [SupportedPlatform.PC]
    )

    return GameConfig(
        name=name,
        scenarioId=str(scenario_id),
        crossPlatform=cross_platform,
        supportedPlatforms=[p.value for p in platforms],
        gameProperties=create_default_game_properties(),
    )


def create_default_operating_config() -> OperatingConfig:
    return OperatingConfig()


def create_default_server_config(
    server_name: str,
    scenario_id: str | MissionResourceReference,
    bind_address: str = DEFAULT_BIND_ADDRESS,
    bind_port: int = DEFAULT_BIND_PORT,
    cross_platform: bool = False,
    rcon_password: str = "",
) -> ServerConfig:
    """
    Complete server configuration with sensible defaults.

    Public address/port mirror the bind values; A2S and RCON ports are derived
    from the bind port.

    Examples:
        >>> config = create_default_server_config("My Server", "{ECC61978EDCC2B5A}Missions/23_Campaign.conf")
        >>> (config.bindPort, config.a2s.port, config.rcon.port)
        (2001, 2002, 2003)
    """
    return ServerConfig(
        bindAddress=bind_address,
        bindPort=bind_port,
        publicAddress=bind_address,
        publicPort=bind_port,
        a2s=create_default_a2s_config(bind_port),
        rcon=create_default_rcon_config(bind_port, rcon_password),
        game=create_default_game_config(server_name, scenario_id, cross_platform),
        operating=create_default_operating_config(),
    )
