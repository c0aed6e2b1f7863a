"""People domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...schemas import PersonRole
from ...shared.validators import normalize_phone


class PersonUpdate(BaseModel):
    """Schema for updating a person; omitted fields keep their value"""

    name: Optional[str] = None
    role: Optional[PersonRole] = None
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return normalize_phone(v)
        return v
