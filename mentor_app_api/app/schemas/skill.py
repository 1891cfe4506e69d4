"""
Pydantic schemas for skill payloads.

A skill is a named topic users can teach or learn.  New skills are
unauthorized until an operator approves them, either through ``PUT``
or the ``authorize_skill.py`` script.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import clean_text


class SkillCreate(BaseModel):
    """Schema for creating a skill."""

    name: str = Field(..., examples=["Python"])
    authorized: Optional[bool] = Field(False, examples=[False])
    added: Optional[datetime] = Field(
        None,
        examples=["2024-01-01T00:00:00"],
        description="Time the skill was added; defaults to now",
    )

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, v):
        v = clean_text(v)
        if isinstance(v, str) and not v:
            raise ValueError("Skill is missing a name")
        return v

    @field_validator("authorized", mode="before")
    @classmethod
    def default_authorized(cls, v):
        return False if v is None else v


class SkillUpdate(SkillCreate):
    """Schema for saving a skill under a known identifier.

    The whole skill is sent; the upsert replaces the stored name and
    authorization flag.
    """
