"""Shared schema configuration.

The JSON API speaks camelCase (``orderNumber``, ``paymentStatus``); Python
code keeps snake_case attribute names. Request bodies accept either form.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising to camelCase and reading ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
