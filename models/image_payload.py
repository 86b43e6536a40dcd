# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Turns a user-selected photo into a transport-ready payload."""

import base64
import io
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from common.analytics import get_logger
from common.error_handling import InputError, ReadError
from common.utils import to_data_url
from config.default import Default

logger = get_logger(__name__)

NOT_AN_IMAGE_MESSAGE = "Please select an image file."


@dataclass
class SourceImage:
    """The photo as selected by the user, held in memory only."""

    name: str
    mime_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_upload(cls, upload) -> "SourceImage":
        """Reads a Mesop UploadedFile (or any file object exposing getvalue()).

        Raises:
            ReadError: if the file contents cannot be read.
        """
        name = getattr(upload, "name", "") or ""
        try:
            data = upload.getvalue()
        except (OSError, ValueError) as e:
            logger.error(f"Could not read uploaded file '{name}': {e}")
            raise ReadError(f"Could not read file '{name}'") from e
        return cls(
            name=name,
            mime_type=getattr(upload, "mime_type", "") or "",
            data=data,
        )


@dataclass(frozen=True)
class EncodedPayload:
    """Base64 image bytes plus their content type."""

    mime_type: str
    data: str

    def decoded(self) -> bytes:
        return base64.b64decode(self.data)

    def to_data_url(self) -> str:
        return to_data_url(self.mime_type, self.data)


def sniff_image_mime_type(data: bytes) -> str | None:
    """Detects the image MIME type from the bytes themselves."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format)
    except (UnidentifiedImageError, OSError):
        return None


def detect_mime_type(source: SourceImage) -> str:
    """Returns the content type to send, preferring the declared one.

    Raises:
        InputError: if neither the declared type nor the bytes say image.
    """
    if source.mime_type.startswith("image/"):
        return source.mime_type

    sniffed = sniff_image_mime_type(source.data)
    if sniffed and sniffed.startswith("image/"):
        logger.info(
            f"Declared type '{source.mime_type}' for '{source.name}' replaced by {sniffed}"
        )
        return sniffed

    raise InputError(NOT_AN_IMAGE_MESSAGE)


def encode_image(source: SourceImage) -> EncodedPayload:
    """Encodes the photo for the image generation request."""
    mime_type = detect_mime_type(source)

    max_bytes = Default().MAX_UPLOAD_MB * 1024 * 1024
    if source.size > max_bytes:
        logger.warning(
            f"'{source.name}' is {source.size} bytes, above the {Default().MAX_UPLOAD_MB}MB guideline"
        )

    return EncodedPayload(
        mime_type=mime_type,
        data=base64.b64encode(source.data).decode("ascii"),
    )


PREVIEW_MAX_SIZE = (512, 512)


def make_preview_data_url(source: SourceImage, max_size=PREVIEW_MAX_SIZE) -> str:
    """Builds a small thumbnail data URL for showing the selected photo.

    The thumbnail is only for display; the full photo is encoded separately
    for each generation request. Returns "" when Pillow cannot decode the
    image.

    Raises:
        InputError: if the file is not an image.
    """
    detect_mime_type(source)
    try:
        with Image.open(io.BytesIO(source.data)) as img:
            img.thumbnail(max_size)
            has_alpha = img.mode in ("RGBA", "LA", "P")
            preview = img.convert("RGBA" if has_alpha else "RGB")
            buf = io.BytesIO()
            if has_alpha:
                preview.save(buf, format="PNG", optimize=True)
                mime_type = "image/png"
            else:
                preview.save(buf, format="JPEG", quality=85)
                mime_type = "image/jpeg"
    except (UnidentifiedImageError, OSError) as e:
        logger.info(f"No preview for '{source.name}': {e}")
        return ""
    return to_data_url(mime_type, base64.b64encode(buf.getvalue()).decode("ascii"))
