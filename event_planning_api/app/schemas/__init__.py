"""
Pydantic schema definitions for API payloads.

Each entity (events, tasks, guests) defines its own Pydantic models
for request and response bodies.  Schemas are separated from the
SQLite rows to decouple API representation from persistence.
"""
