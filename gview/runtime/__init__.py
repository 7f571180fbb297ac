"""Interactive runtime: event loop, frame composition, and session wiring."""

from .app import run_browser

__all__ = ["run_browser"]
