from __future__ import annotations

SENTRY_CLI_BIN = "sentry-cli"

OPTIONS_FILENAME = "relfin.toml"

# Matches the fixed prefix on every finalization error.
ERROR_PREFIX = "relfin"

DEFAULT_DELETE_PATTERN = r"\.map$"

DRY_RUN_PLACEHOLDER_VERSION = "dry-run"

VERSION_HINT_URL = "https://docs.sentry.io/cli/releases/#creating-releases"
