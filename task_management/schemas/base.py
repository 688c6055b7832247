from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python.

    Unknown fields in request bodies are ignored.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


def reject_null(field_name: str, value):
    """Optional update fields that map to non-null columns may be omitted, not nulled."""
    if value is None:
        raise ValueError(f"{field_name} may not be null")
    return value
