"""Pydantic schema for pairing a mentor with an apprentice."""

from pydantic import BaseModel, Field, field_validator

from .common import require_identifier


class PartnershipCreate(BaseModel):
    mentor: str = Field(..., examples=["abc1234567"], description="User id of the mentor")
    apprentice: str = Field(..., examples=["def7654321"], description="User id of the apprentice")

    @field_validator("mentor", "apprentice")
    @classmethod
    def check_identifier(cls, v, info):
        return require_identifier(v, info.field_name)
