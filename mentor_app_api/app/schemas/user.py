"""
Pydantic models for user data.

Users describe themselves (names, contact handles, timezone), say
whether they are available as mentor and/or apprentice, and list the
skills they teach and the skills they want to learn by skill id.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .common import clean_optional_text, clean_text, require_identifier


class UserBase(BaseModel):
    first_name: str = Field(..., examples=["Ada"])
    last_name: str = Field(..., examples=["Lovelace"])
    email: str = Field(..., examples=["ada@example.com"])
    github_handle: Optional[str] = Field(None, examples=["ada"])
    twitter_handle: Optional[str] = Field(None, examples=["@ada"])
    irc_nick: Optional[str] = Field(None, examples=["ada_l"])
    mentor_available: bool = Field(False, examples=[True])
    apprentice_available: bool = Field(False, examples=[False])
    timezone: Optional[str] = Field(None, examples=["Europe/London"])
    teaching_skills: List[str] = Field(default_factory=list, examples=[["0a1b2c3d4e"]])
    learning_skills: List[str] = Field(default_factory=list)

    @field_validator("first_name", "last_name", "email", mode="before")
    @classmethod
    def clean_required(cls, v, info):
        v = clean_text(v)
        if isinstance(v, str) and not v:
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @field_validator("github_handle", "twitter_handle", "irc_nick", "timezone", mode="before")
    @classmethod
    def clean_optional(cls, v):
        return clean_optional_text(v)

    @field_validator("teaching_skills", "learning_skills", mode="before")
    @classmethod
    def check_skill_ids(cls, v):
        if v is None:
            return []
        if isinstance(v, list):
            for item in v:
                require_identifier(item, "skill id")
        return v


class UserCreate(UserBase):
    """Schema for registering a user.  The identifier is assigned by the server."""


class UserUpdate(UserBase):
    """Schema for replacing a user's profile; the identifier comes from the path."""
