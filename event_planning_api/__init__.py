"""
Top‑level package for the Event Planning API.

This file makes ``event_planning_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``event_planning_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
