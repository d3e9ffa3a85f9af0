from __future__ import annotations

# Metadata calls (new, finalize, set-commits, deploys, propose-version)
SENTRY_CLI_TIMEOUT_SECONDS = 60.0

# Artifact upload and bulk delete
SENTRY_CLI_UPLOAD_TIMEOUT_SECONDS = 15 * 60.0
