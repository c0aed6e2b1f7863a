"""Product domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    subType: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v
