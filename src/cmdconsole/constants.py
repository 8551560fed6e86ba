"""Application-level constants for cmdconsole.

This module keeps only cross-cutting app/file/path constants.
"""

# ============================================================================
# Application identity
# ============================================================================

APP_NAME = "cmdconsole"

# ============================================================================
# File names
# ============================================================================

LOG_FILE_EXTENSION = ".log"

# ============================================================================
# Default directories and paths
# ============================================================================

# User data directory (created in home directory)
USER_DATA_DIR = f"~/.{APP_NAME}"

DEFAULT_HISTORY_FILE = f"{USER_DATA_DIR}/history"
DEFAULT_LOGS_DIR = f"{USER_DATA_DIR}/logs"

DATETIME_FORMAT_FILENAME = "%Y-%m-%d_%H-%M-%S"
ARGS_SUMMARY_MAX_CHARS = 200

# ============================================================================
# Console defaults
# ============================================================================

DEFAULT_PROMPT = "> "
DEFAULT_HISTORY_SIZE = 100

# ============================================================================
# Display
# ============================================================================

BORDERLINE_CHAR = "━"
BORDERLINE_WIDTH = 60
