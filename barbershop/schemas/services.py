# barbershop/schemas/services.py

from typing import Optional

from pydantic import Field, field_validator

from .base import ApiModel, reject_null


class ServiceCreate(ApiModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(ge=0)
    duration_min: int = Field(ge=5)
    loyalty_points_earned: int = Field(0, ge=0)
    is_active: bool = True


class ServiceUpdate(ApiModel):
    """Partial update; only description may be cleared with null."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    duration_min: Optional[int] = Field(None, ge=5)
    loyalty_points_earned: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("name", "price", "duration_min", "loyalty_points_earned", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class ServiceRead(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    duration_min: int
    loyalty_points_earned: int
    is_active: bool
