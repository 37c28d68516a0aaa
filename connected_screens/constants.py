"""
Application-level constants.

These values describe the wire protocol and are not meant to be changed
through configuration. For configurable values (bind address, initial
state, validation bounds, logging) see connected_screens/settings.py.
"""

# ============================================================================
# WebSocket Protocol Constants
# ============================================================================

# Wire field names shared by the init and update messages
BALL_POSITION_FIELD = "ballPosition"
CURRENT_SCREEN_FIELD = "currentScreen"


# ============================================================================
# Logging
# ============================================================================

# Upper bound for a single JSON log line
MAX_LOG_SIZE_BYTES = 100_000
