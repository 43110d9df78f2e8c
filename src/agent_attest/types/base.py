"""Strict base model shared by every attestation value."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictBaseModel(BaseModel):
    """
    Frozen, strict model for payloads, schemas, signatures and grants.

    Inputs are never coerced: a `bytes` field rejects a hex string and an
    enum field rejects a bare integer. Unknown fields are errors.

    Field names serialize in camel case (`task_ref` becomes `taskRef`) so
    JSON dumps line up with the companion SDK's payload objects.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        arbitrary_types_allowed=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )
