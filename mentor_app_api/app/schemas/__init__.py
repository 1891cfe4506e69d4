"""
Pydantic schema definitions for API payloads.

Each domain (users, skills, partnerships) defines its own Pydantic
models for request bodies.  Schemas are separated from the domain
models in ``models.py`` to decouple API representation from
persistence.
"""
