"""uiextract Command Line Interface.

Provides CLI commands for:
- Detecting UI components in an image
- Extracting an image's style palette
- Validating saved detections against test case fixtures

Usage:
    python -m uiextract.cli --help
    python -m uiextract.cli detect screen.png --strategy similarity

Or via the installed entry point:
    uiextract --help
"""

from .main import main

__all__ = ["main"]
