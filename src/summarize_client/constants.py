"""
Project-wide constants for the summarize CLI client
"""  # noqa: D200, D212, D415

# ==============================================================================
# External Binary
# ==============================================================================

# Bare command name, resolved by the launcher's PATH search when nothing better
# is found on disk
DEFAULT_BINARY_NAME = "summarize"

# Probed in order after the PATH lookup
FALLBACK_INSTALL_DIRS = (
    "/usr/local/bin",
    "/opt/homebrew/bin",
)

INSTALL_HINT = "npm i -g @steipete/summarize"

# Oldest CLI release whose --json payload and flags this client understands
MINIMUM_CLI_VERSION = "0.5.0"

VERSION_FLAG = "--version"
VERSION_PROBE_TIMEOUT = 10.0  # seconds

# ==============================================================================
# Process Outcomes
# ==============================================================================

EXIT_SUCCESS = 0
EXIT_INTERRUPTED = 130  # 128 + SIGINT
EXIT_TERMINATED = 143  # 128 + SIGTERM

# Raw output included in parse-failure messages
OUTPUT_PREVIEW_CHARS = 500

# CLI output is decoded leniently; undecodable bytes become U+FFFD
OUTPUT_ENCODING = "utf-8"
OUTPUT_DECODE_ERRORS = "replace"

# ==============================================================================
# Text Input
# ==============================================================================

TEMP_FILE_PREFIX = "summarize-input"
TEMP_FILE_SUFFIX = ".txt"

# ==============================================================================
# Configuration
# ==============================================================================

ENV_PREFIX = "SUMMARIZE_CLIENT_"

# default_model value meaning "let the CLI pick"
AUTO_MODEL = "auto"
