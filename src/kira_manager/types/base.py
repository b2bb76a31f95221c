"""Reusable base models for configuration and wire payloads."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import DecodeError


class StrictBaseModel(BaseModel):
    """A strict, immutable pydantic base model."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        validate_default=True,
    )

    def copy(self: Self, **kwargs: Any) -> Self:
        """Create a copy of the model with the updated fields that are validated."""
        return self.__class__(**(self.model_dump(exclude_unset=True) | kwargs))


class WireModel(BaseModel):
    """
    A frozen model for JSON emitted by the node daemons.

    Daemon outputs grow new fields between releases, so unknown keys are
    ignored. Declared fields are still required and type-checked: a missing
    field is a decode failure, never a silent zero value.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @classmethod
    def decode(cls, raw: bytes | str, source: str) -> Self:
        """
        Decode a JSON payload into this model.

        Args:
            raw: The payload exactly as received.
            source: The endpoint or command that produced it, for diagnostics.

        Raises:
            DecodeError: If the payload is not JSON or does not match the schema.
                The raw payload is attached to the error.
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as exc:
            raise DecodeError(source, f"invalid {cls.__name__}: {exc}", raw) from exc
