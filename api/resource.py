"""
Generic validated CRUD resource.

A Resource binds one entity's marshmallow schema to its RecordStore and runs
every request through the same steps: validate, check references and unique
values, attach the uploaded image, persist, shape the response. Entity modules
subclass it, set the class attributes and override the hooks they need.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from flask import current_app, request
from marshmallow import Schema
from werkzeug.datastructures import FileStorage

from api.errors import Conflict, InvalidInput, NotFound
from api.utils.uploads import IMAGE_FIELD, StoredFile, UploadStore
from models.db_storage import (
    ConstraintViolation,
    DBStorage,
    UniqueConstraintViolation,
)
from models.schemas.common import parse

logger = logging.getLogger(__name__)


def get_resource(name: str) -> "Resource":
    return current_app.extensions["resources"][name]


def read_payload() -> Any:
    """Request body as a plain dict: form fields for multipart/urlencoded, else JSON."""
    if request.mimetype in ("multipart/form-data", "application/x-www-form-urlencoded"):
        return request.form.to_dict()
    return request.get_json(silent=True) or {}


def read_image() -> Optional[FileStorage]:
    return request.files.get(IMAGE_FIELD)


class Resource:
    model = None
    schema: Schema = None
    # get-by-id view, when it differs from the listing shape
    detail_schema: Optional[Schema] = None
    label = "record"
    unique_fields: tuple[str, ...] = ()
    upload_kind: Optional[str] = None
    list_include: tuple[str, ...] = ()
    detail_include: tuple[str, ...] = ()

    def __init__(self, storage: DBStorage, uploads: Optional[UploadStore] = None):
        self.records = storage.records(self.model)
        self.uploads = uploads

    # -- hooks -------------------------------------------------------------

    def before_create(self, values: dict) -> None:
        """Extra checks on a validated create payload."""

    def before_update(self, record, values: dict) -> None:
        """Extra checks on a validated partial update."""

    def before_delete(self, record) -> None:
        """Refuse a delete by raising."""

    def describe_conflict(self, err: ConstraintViolation) -> str:
        if isinstance(err, UniqueConstraintViolation):
            return self._duplicate_message(err.fields)
        return f"The {self.label} is referenced by other records."

    # -- operations --------------------------------------------------------

    def list(self) -> list:
        rows = self.records.find_all(include=self.list_include)
        return self.schema.dump(rows, many=True)

    def get(self, key: int) -> dict:
        record = self._require(key, include=self.detail_include)
        return (self.detail_schema or self.schema).dump(record)

    def create(self, payload: Any, image: Optional[FileStorage] = None) -> dict:
        image = self._accept_image(image)
        values = self._validate(payload)
        self.before_create(values)
        self._check_unique(values)
        stored = self._store_image(image, values)
        record = self._persist(lambda: self.records.create(values), stored)
        logger.info("Created %s %s", self.label, record.id)
        return self.schema.dump(self._reload(record))

    def update(self, key: int, payload: Any, image: Optional[FileStorage] = None) -> dict:
        record = self._require(key)
        image = self._accept_image(image)
        values = self._validate(payload, partial=True)
        self.before_update(record, values)
        self._check_unique(values, exclude=record)
        previous_image = getattr(record, "image", None)
        stored = self._store_image(image, values)
        record = self._persist(lambda: self.records.update(record, values), stored)
        if previous_image != getattr(record, "image", None):
            self._release_image(previous_image, record)
        logger.info("Updated %s %s (%s)", self.label, record.id, ", ".join(sorted(values)) or "no fields")
        return self.schema.dump(self._reload(record))

    def delete(self, key: int) -> None:
        record = self._require(key)
        self.before_delete(record)
        image = getattr(record, "image", None) if self.upload_kind else None
        self._persist(lambda: self.records.delete(record), None)
        self._release_image(image, record)
        logger.info("Deleted %s %s", self.label, key)

    # -- steps -------------------------------------------------------------

    def _require(self, key: int, include: Iterable[str] = ()):
        record = self.records.find_by_key(key, include=include)
        if record is None:
            raise NotFound(f"{self.label.capitalize()} not found")
        return record

    def _validate(self, payload: Any, partial: bool = False) -> dict:
        parsed = parse(self.schema, payload, partial=partial)
        if not parsed.ok:
            raise InvalidInput(f"Invalid {self.label} data", issues=parsed.issues)
        return parsed.value

    def _check_unique(self, values: dict, exclude=None) -> None:
        clashing = []
        for field in self.unique_fields:
            value = values.get(field)
            if value is None:
                continue
            rows = self.records.find_where(**{field: value})
            if any(exclude is None or row.id != exclude.id for row in rows):
                clashing.append(field)
        if clashing:
            logger.warning("Duplicate %s rejected: %s", self.label, ", ".join(clashing))
            raise Conflict(self._duplicate_message(clashing))

    def _accept_image(self, image: Optional[FileStorage]) -> Optional[FileStorage]:
        if not self.upload_kind or image is None or not image.filename:
            return None
        self.uploads.check(image)
        return image

    def _store_image(self, image: Optional[FileStorage], values: dict) -> Optional[StoredFile]:
        if image is None:
            return None
        stored = self.uploads.save(image, self.upload_kind)
        values["image"] = stored.public_path
        return stored

    def _release_image(self, public_path: Optional[str], record) -> None:
        """Delete a managed image of this kind once no other row points at it."""
        if not self.upload_kind or not public_path:
            return
        if not public_path.startswith(f"{self.uploads.public_prefix}/{self.upload_kind}/"):
            return
        if self.records.find_where(self.model.image == public_path, self.model.id != record.id):
            logger.info("Kept upload %s: still referenced", public_path)
            return
        self.uploads.remove(public_path)

    def _persist(self, write, stored: Optional[StoredFile]):
        try:
            return write()
        except ConstraintViolation as err:
            if stored:
                stored.discard()
            logger.warning("%s write conflicted: %s", self.label.capitalize(), err)
            raise Conflict(self.describe_conflict(err)) from err
        except Exception:
            if stored:
                stored.discard()
            raise

    def _reload(self, record):
        if not self.list_include:
            return record
        key = record.id
        # a changed foreign key leaves the loaded association stale
        self.records.session.expire(record)
        return self.records.find_by_key(key, include=self.list_include) or record

    def _duplicate_message(self, fields: Iterable[str]) -> str:
        names = [self._public_name(f) for f in fields]
        return f"A {self.label} with this {' or '.join(names)} already exists"

    def _public_name(self, attr: str) -> str:
        field = self.schema.fields.get(attr)
        return (field.data_key if field is not None and field.data_key else attr)
