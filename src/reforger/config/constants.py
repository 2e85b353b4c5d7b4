"""
Reforger Server - Constants

Centralized defaults and validation thresholds for server configuration.
"""

import os

# =============================================================================
# Environment Configuration
# =============================================================================

DEFAULT_BIND_ADDRESS = os.getenv("REFORGER_BIND_ADDRESS", "0.0.0.0")
DEFAULT_BIND_PORT = int(os.getenv("REFORGER_BIND_PORT", "2001"))
DEFAULT_RCON_ADDRESS = os.getenv("REFORGER_RCON_ADDRESS", "127.0.0.1")

WORKSHOP_BASE_URL = os.getenv(
    "REFORGER_WORKSHOP_URL", "https://reforger.armaplatform.com/workshop"
).rstrip("/")

# Offsets of the derived ports relative to the bind port
A2S_PORT_OFFSET = 1
RCON_PORT_OFFSET = 2


# =============================================================================
# Identifier Formats
# =============================================================================

RESOURCE_ID_LENGTH = 16
MOD_ID_LENGTH = 16
URL_NAME_MAX_LENGTH = 50


# =============================================================================
# Validation Thresholds
# =============================================================================

# Ports
PORT_MIN = 1024
PORT_MAX = 65535

# Remote admin (RCON)
RCON_PASSWORD_MIN_LENGTH = 3
RCON_PASSWORD_RECOMMENDED_LENGTH = 8
RCON_PERMISSIONS = ("admin", "monitor")
RCON_MAX_CLIENTS_MIN = 1
RCON_MAX_CLIENTS_MAX = 16
COMMON_PASSWORDS = frozenset(
    {
        "admin",
        "password",
        "rcon",
        "changeme",
        "reforger",
        "arma",
        "123456",
        "12345678",
        "qwerty",
        "letmein",
    }
)

# Game
GAME_NAME_MAX_LENGTH = 100
ADMINS_MAX_ENTRIES = 20
PLAYER_COUNT_MIN = 1
PLAYER_COUNT_RECOMMENDED_MAX = 96  # Performance impact increases significantly above this
PLAYER_COUNT_MAX = 128

# View distance
VIEW_DISTANCE_MAX = 10000
VIEW_DISTANCE_MINIMUM_RECOMMENDED = 500
VIEW_DISTANCE_RECOMMENDED_MAX = 2500
# Accepted range is (0, 5000]; the documented server range starts at 500, which is
# left to the ratio warning rather than a hard error
NETWORK_VIEW_DISTANCE_MAX = 5000
NETWORK_VIEW_DISTANCE_RATIO = 0.9
NETWORK_VIEW_DISTANCE_RATIO_MIN = 0.5
NETWORK_VIEW_DISTANCE_RATIO_MAX = 1.0

# Grass distance: 0 disables, otherwise [50, 150]
GRASS_DISTANCE_MIN = 50
GRASS_DISTANCE_MAX = 150
GRASS_DISTANCE_HIGH_IMPACT = 100

# Operating
AI_LIMIT_HIGH_IMPACT = 80
SLOT_RESERVATION_TIMEOUT_MIN = 5
SLOT_RESERVATION_TIMEOUT_MAX = 300
JOIN_QUEUE_MIN = 0
JOIN_QUEUE_MAX = 50
