"""
Image uploads for create/update requests.

One file per request under the `image` form field. Both the file extension and
the declared content type must name an allowed image format; the stored name is
the sanitized original base name plus a time-and-random token, so two uploads
never collide and the client's filename can't steer the write location.
"""
from __future__ import annotations

import logging
import os
import secrets
import time
from dataclasses import dataclass

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from api.errors import UploadRejected

logger = logging.getLogger(__name__)

IMAGE_FIELD = "image"
ALLOWED_IMAGE_TYPES = ("jpeg", "jpg", "png", "gif", "webp")
UPLOAD_KINDS = ("products", "students", "customers")
DEFAULT_MAX_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class StoredFile:
    path: str
    public_path: str

    def discard(self) -> None:
        """Remove the file; used when the record it belongs to was not written."""
        try:
            os.remove(self.path)
        except FileNotFoundError:
            return
        logger.info("Discarded upload %s", self.public_path)


def upload_token() -> str:
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"


def unique_filename(original: str) -> str:
    base, ext = os.path.splitext(os.path.basename(original or ""))
    base = secure_filename(base) or "image"
    ext = ext.lower() if ext[1:].isalnum() else ""
    return f"{base}-{upload_token()}{ext}"


class UploadStore:
    def __init__(self, root: str, public_prefix: str = "/uploads", max_bytes: int = DEFAULT_MAX_BYTES):
        self.root = os.path.abspath(root)
        self.public_prefix = public_prefix.rstrip("/")
        self.max_bytes = max_bytes

    def directory(self, kind: str) -> str:
        if kind not in UPLOAD_KINDS:
            raise ValueError(f"Unknown upload kind: {kind}")
        return os.path.join(self.root, kind)

    def check(self, file: FileStorage) -> None:
        """Raise UploadRejected unless the file is an allowed image within the size limit."""
        ext = os.path.splitext(file.filename or "")[1].lower().lstrip(".")
        major, _, subtype = (file.mimetype or "").lower().partition("/")
        if ext not in ALLOWED_IMAGE_TYPES or major != "image" or subtype not in ALLOWED_IMAGE_TYPES:
            logger.warning("Rejected upload %r (%s)", file.filename, file.mimetype)
            raise UploadRejected(
                "Only image files are allowed ({}).".format(", ".join(ALLOWED_IMAGE_TYPES))
            )
        if self._size(file) > self.max_bytes:
            logger.warning("Rejected oversized upload %r", file.filename)
            raise UploadRejected(
                f"File too large. Maximum size is {self.max_bytes // (1024 * 1024)} MB.", status=413
            )

    def save(self, file: FileStorage, kind: str) -> StoredFile:
        directory = self.directory(kind)
        os.makedirs(directory, exist_ok=True)
        name = unique_filename(file.filename)
        path = os.path.join(directory, name)
        file.save(path)
        logger.info("Stored upload %s", path)
        return StoredFile(path=path, public_path=f"{self.public_prefix}/{kind}/{name}")

    def remove(self, public_path: str | None) -> bool:
        """Delete a file this store wrote earlier; foreign URLs are left alone."""
        if not public_path or not public_path.startswith(self.public_prefix + "/"):
            return False
        kind, _, name = public_path[len(self.public_prefix) + 1:].partition("/")
        if kind not in UPLOAD_KINDS or not name or name != os.path.basename(name):
            return False
        try:
            os.remove(os.path.join(self.directory(kind), name))
        except FileNotFoundError:
            return False
        logger.info("Removed upload %s", public_path)
        return True

    @staticmethod
    def _size(file: FileStorage) -> int:
        stream = file.stream
        position = stream.tell()
        stream.seek(0, os.SEEK_END)
        size = stream.tell()
        stream.seek(position)
        return size
