"""Release finalizer for sentry-cli driven release publishing."""

__version__ = "0.3.0"
