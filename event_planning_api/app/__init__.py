"""
Application package initializer.

The project is organised into a few logical pieces: ``core`` holds
configuration, logging, storage and identity helpers; ``schemas``
defines request and response models; ``services`` contains the
ownership‑scoped business logic for events, tasks and guests; and
``api`` exposes the services over HTTP, grouped by version under
``api/<version>/``.
"""

from .main import app  # noqa: F401
