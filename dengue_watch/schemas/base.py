"""
Base Pydantic schemas.

This module contains base schemas with common configurations that other
schemas inherit from.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    Request schemas inherit from this class.
    """

    model_config = ConfigDict(from_attributes=True)


class ValueSchema(BaseSchema):
    """
    Immutable value object.

    Engine inputs and outputs inherit from this class; instances are never
    mutated after creation.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)
