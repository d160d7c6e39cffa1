# barbershop/schemas/base.py

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case accepted on input."""

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


def reject_null(value):
    """Field validator for PATCH bodies: an explicit null on a required column."""
    if value is None:
        raise ValueError("may not be null")
    return value
