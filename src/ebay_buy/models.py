"""Typed payload helpers shared by the resource wrappers.

Payloads are pydantic models deriving from :class:`Model`. JSON keys are the
camelCase form of the field names; ``null`` values fall back to the field
default and unknown keys are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

M = TypeVar("M", bound="Model")


class Model(BaseModel):
    """Base class of every typed request and response payload."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @classmethod
    def from_dict(cls: type[M], payload: Any) -> M:
        """Build an instance from decoded JSON.

        Raises ``pydantic.ValidationError`` when a value does not fit its field.
        """
        return cls.model_validate(payload)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict keyed by camelCase, omitting ``None``."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Amount(Model):
    value: str = ""
    currency: str = ""


class Image(Model):
    image_url: str = ""


class Seller(Model):
    username: str = ""
    feedback_percentage: str = ""
    feedback_score: int = 0


class Region(Model):
    region_name: str = ""
    region_type: str = ""


class ShipToLocations(Model):
    region_included: list[Region] = []
    region_excluded: list[Region] = []


class ItemLocation(Model):
    city: str = ""
    state_or_province: str = ""
    postal_code: str = ""
    country: str = ""


class LocalizedAspect(Model):
    type: str = ""
    name: str = ""
    value: str = ""


class MarketingPrice(Model):
    original_price: Amount = Field(default_factory=Amount)
    discount_percentage: str = ""
    discount_amount: Amount = Field(default_factory=Amount)
