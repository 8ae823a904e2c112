from pydantic import BaseModel, Field, field_validator
from typing import Optional

from constants import RecipeLimits


class RecipeBase(BaseModel):
    label: str = Field(..., max_length=RecipeLimits.LABEL_MAX_LENGTH)
    ingredients: str = ""
    instructions: str = ""
    calories: int = Field(0, ge=0)


class RecipeCreate(RecipeBase):
    """Payload for creating a recipe"""

    @field_validator('label')
    @classmethod
    def label_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('label must not be blank')
        return v


class RecipeUpdate(BaseModel):
    """Partial update: omitted fields are left unchanged, explicit nulls are rejected"""
    label: Optional[str] = Field(None, max_length=RecipeLimits.LABEL_MAX_LENGTH)
    ingredients: Optional[str] = None
    instructions: Optional[str] = None
    calories: Optional[int] = Field(None, ge=0)

    @field_validator('label', 'ingredients', 'instructions', 'calories')
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError('must not be null; omit the field to keep its value')
        return v

    @field_validator('label')
    @classmethod
    def label_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError('label must not be blank')
        return v


class RecipeRead(RecipeBase):
    id: int

    class Config:
        from_attributes = True
