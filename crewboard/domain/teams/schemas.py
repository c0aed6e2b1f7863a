"""Team domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator


class TeamUpdate(BaseModel):
    """Schema for updating a team; omitted fields keep their value"""

    name: Optional[str] = None
    teamLeadId: Optional[str] = None
    memberIds: Optional[list[str]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v
