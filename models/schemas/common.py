from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from marshmallow import EXCLUDE, Schema, ValidationError, fields, pre_load


@dataclass(frozen=True)
class Parsed:
    """Outcome of validating a payload: a normalized value or field issues."""

    value: Optional[dict] = None
    issues: Optional[dict] = None

    @property
    def ok(self) -> bool:
        return self.issues is None


def parse(schema: Schema, payload: Any, partial: bool = False) -> Parsed:
    """
    Validate `payload` against `schema`.
    Strict mode (partial=False) requires every required field; partial mode
    makes all fields optional but still checks the ones that are present.
    The payload itself is never modified.
    """
    try:
        return Parsed(value=schema.load(payload, partial=partial))
    except ValidationError as err:
        return Parsed(issues=err.normalized_messages())


def non_blank(value: str) -> bool:
    if not value or not value.strip():
        raise ValidationError("Must not be empty.")
    return True


class Amount(fields.Decimal):
    """Decimal on load (exact arithmetic in the store), JSON number on dump."""

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return float(value)


class WholeNumber(fields.Integer):
    """Integer that refuses fractional input instead of truncating it; numeric strings still load."""

    def _deserialize(self, value, attr, data, **kwargs):
        number = super()._deserialize(value, attr, data, **kwargs)
        if number is not None and Decimal(str(value).strip()) != number:
            raise self.make_error("invalid")
        return number


class RecordSchema(Schema):
    """Common shape: generated id and timestamps are output-only; unknown keys are dropped."""

    class Meta:
        unknown = EXCLUDE
        ordered = True

    id = fields.Integer(dump_only=True)
    created_at = fields.DateTime(dump_only=True, data_key="createdAt")
    updated_at = fields.DateTime(dump_only=True, data_key="updatedAt")

    @pre_load
    def _trim_email(self, data, **kwargs):
        # work on a copy; callers keep their payload untouched
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        if isinstance(data.get("email"), str):
            data["email"] = data["email"].strip()
        return data
