from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

import pytest

from reforger.config.models import ServerConfig
from reforger.core.defaults import create_default_server_config
from reforger.core.scenarios import DEFAULT_SCENARIO

WHERE_AM_I_URL = "https://reforger.armaplatform.com/workshop/5965550F24A0C152-WhereAmI"
WHERE_AM_I_ID = "5965550F24A0C152"
CAMPAIGN_REFERENCE = "{ECC61978EDCC2B5A}Missions/23_Campaign.conf"


def _set_path(data: dict[str, Any], path: str, value: Any) -> None:
    keys = path.split(".")
    node = data
    for key in keys[:-1]:
        node = node[key]
    node[keys[-1]] = value


@pytest.fixture
def base_dict() -> dict[str, Any]:
    """Raw configuration that validates with no errors and no warnings."""
    config = create_default_server_config(
        "Test Server",
        DEFAULT_SCENARIO,
        bind_address="0.0.0.0",
        bind_port=2001,
        rcon_password="Str0ngRconPass",
    )
    data = config.to_dict()
    data["game"]["passwordAdmin"] = "AdminPass123"
    return data


@pytest.fixture
def make_config(base_dict: dict[str, Any]) -> Callable[..., ServerConfig]:
    """Build a ServerConfig from the baseline with overrides.

    Keyword names use ``__`` for nesting: ``game__maxPlayers=100``.
    """

    def _make(**overrides: Any) -> ServerConfig:
        data = copy.deepcopy(base_dict)
        for key, value in overrides.items():
            _set_path(data, key.replace("__", "."), value)
        return ServerConfig.model_validate(data)

    return _make
