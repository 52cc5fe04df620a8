"""
Floreria Backend — Image Store
================================

What:  Decodes ramo images sent as data URIs, stores them under generated
       names, removes them when a ramo is updated or deleted, and turns a
       stored name into a public URL.
Who:   Used only by RamoService (create / update / delete) and the ramos
       routes (URL resolution when serializing rows).

Payloads accepted by store():
    1. Data URI:     "data:image/png;base64,iVBORw0KGgo..."
                     → decoded, written, new file name returned
    2. Stored name:  "20250101120000_9f2c1a7b3e4d5f60.png"
                     → returned unchanged when the file exists
       A full URL previously returned as imagen_url is accepted too; its last
       path segment is used as the name.

File names:
    <UTC timestamp>_<16 hex chars from uuid4>.<ext>
    No client input ends up in a file name, and two uploads in the same second
    still get different names.
"""

import base64
import binascii
import logging
import os
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from app.exceptions import ImageWriteError

logger = logging.getLogger(__name__)

# ── Extensions ────────────────────────────────────────────────────────────
# MIME subtype → stored extension; anything else is saved as .jpg
SUBTYPE_EXTENSIONS = {
    "png": ".png",
    "gif": ".gif",
    "jpeg": ".jpg",
    "jpg": ".jpg",
}
DEFAULT_EXTENSION = ".jpg"

# Public path stored images are served under (app/routes/uploads.py)
UPLOADS_URL_PATH = "/uploads"

DATA_URI_PATTERN = re.compile(
    r"^data:image/(?P<subtype>[\w.+-]+)(?:;[\w=.+-]+)*;base64,(?P<body>.*)$",
    re.IGNORECASE | re.DOTALL,
)

# Names this store generates (and the only names it will look up)
STORED_NAME_PATTERN = re.compile(r"^[\w-]+\.(?:png|gif|jpg)$")


def extension_for(subtype: str) -> str:
    return SUBTYPE_EXTENSIONS.get(subtype.lower(), DEFAULT_EXTENSION)


def is_data_uri(payload: Optional[str]) -> bool:
    """True for inline image content, False for a stored-file reference."""
    return bool(payload) and payload[:5].lower() == "data:"


class ImageService:
    """
    Owns the upload directory.

    Lifecycle of a ramo image:
        1. POST /ramos with a data URI → store() writes it before the INSERT
        2. INSERT fails → remove() deletes the new file
        3. PUT /ramos/{id} with a new image → store() new, UPDATE,
           then remove() the previous file
        4. DELETE /ramos/{id} → remove() after the row is gone
    """

    def __init__(self, storage_root: str, max_size: int = 10_485_760):
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True)
        self.max_size = max_size
        logger.info("ImageService initialized with storage_root=%s", self.storage_root)

    # ── Paths ─────────────────────────────────────────────────────────────

    def _generate_name(self, extension: str) -> str:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        return f"{stamp}_{uuid.uuid4().hex[:16]}{extension}"

    def path_for(self, file_ref: str) -> Optional[Path]:
        """
        Absolute path of a stored file, or None when `file_ref` is not a name
        this store could have generated (path separators, "..", etc.).
        """
        if not file_ref or not STORED_NAME_PATTERN.match(file_ref):
            return None
        return self.storage_root / file_ref

    def exists(self, file_ref: Optional[str]) -> bool:
        if not file_ref:
            return False
        path = self.path_for(file_ref)
        return path is not None and path.is_file()

    # ── Decoding ──────────────────────────────────────────────────────────

    def decode_data_uri(self, payload: str) -> Tuple[bytes, str]:
        """
        Split a data URI into (decoded bytes, extension).

        Raises:
            ImageWriteError: not base64, empty, or over max_size
        """
        match = DATA_URI_PATTERN.match(payload)
        if match is None:
            raise ImageWriteError(context={"reason": "not a data URI"})

        body = re.sub(r"\s+", "", match.group("body"))
        try:
            content = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageWriteError(context={"reason": "invalid base64", "error": str(e)})

        if not content:
            raise ImageWriteError(context={"reason": "empty image"})
        if len(content) > self.max_size:
            raise ImageWriteError(
                context={"reason": "image too large", "size": len(content), "max_size": self.max_size}
            )
        return content, extension_for(match.group("subtype"))

    # ── Store / Remove ────────────────────────────────────────────────────

    async def write(self, content: bytes, extension: str) -> str:
        """
        Write decoded bytes under a fresh name and return the name.

        Raises:
            ImageWriteError if the file cannot be written
        """
        file_ref = self._generate_name(extension)
        path = self.storage_root / file_ref
        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store image at %s: %s", path, str(e))
            # A partial write must not survive
            await self.remove(file_ref)
            raise ImageWriteError(context={"path": str(path), "os_error": str(e)})

        logger.info("Image stored: %s (%d bytes)", file_ref, len(content))
        return file_ref

    async def store(self, payload: Optional[str]) -> Optional[str]:
        """
        Persist an image payload and return its file reference.

        Returns None when the payload is a data URI that cannot be decoded or
        written, or a reference to a file that does not exist. Callers decide
        whether None is fatal (create) or means "keep the old image" (update).
        """
        if not payload:
            return None

        if is_data_uri(payload):
            try:
                content, extension = self.decode_data_uri(payload)
                return await self.write(content, extension)
            except ImageWriteError as e:
                logger.warning("Image payload rejected: %s", e.context)
                return None

        # Re-submitted reference: bare name or a URL ending in the name
        file_ref = payload.rstrip("/").rsplit("/", 1)[-1]
        if self.exists(file_ref):
            return file_ref
        logger.warning("Image reference does not exist: %s", file_ref)
        return None

    async def remove(self, file_ref: Optional[str]) -> None:
        """
        Delete a stored image. Missing files (and empty references) are a no-op.

        OS errors other than "not found" are logged, not raised: the row
        operation that triggered the cleanup has already committed.
        """
        if not file_ref:
            return
        path = self.path_for(file_ref)
        if path is None:
            logger.warning("Refusing to remove unexpected image reference: %r", file_ref)
            return
        try:
            os.remove(path)
            logger.info("Removed image: %s", file_ref)
        except FileNotFoundError:
            logger.debug("Image already gone: %s", file_ref)
        except OSError as e:
            logger.warning("Failed to remove image %s: %s", file_ref, str(e))

    # ── URLs ──────────────────────────────────────────────────────────────

    def resolve_url(self, file_ref: Optional[str], origin: str) -> Optional[str]:
        """Public URL of a stored image: <origin>/uploads/<file_ref>."""
        if not file_ref:
            return None
        return f"{origin.rstrip('/')}{UPLOADS_URL_PATH}/{file_ref}"
