"""Release publishing pipeline.

- options: typed release options and their TOML loader
- client: sentry-cli adapter and its dry-run variant
- version: one-time release identifier resolution
- finalizer: the ordered publish sequence
- housekeeping: local artifact cleanup after a successful publish
- hook: build host lifecycle glue
"""

from __future__ import annotations
