# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import base64
import io

from PIL import Image

from common.analytics import get_logger

logger = get_logger(__name__)

DATA_URL_PREFIX = "data:"


def to_data_url(mime_type: str, base64_data: str) -> str:
    """Builds a data URL usable directly as an image src or download href."""
    return f"{DATA_URL_PREFIX}{mime_type};base64,{base64_data}"


def parse_data_url(data_url: str) -> tuple[str, str]:
    """Splits a base64 data URL into (mime_type, base64_data).

    Raises:
        ValueError: if the string is not a base64 data URL.
    """
    if not data_url or not data_url.startswith(DATA_URL_PREFIX):
        raise ValueError("Not a data URL")
    # data:image/png;base64,iVBORw0KGgo...
    header, _, encoded = data_url.partition(",")
    if not header.endswith(";base64"):
        raise ValueError("Data URL is not base64 encoded")
    mime_type = header[len(DATA_URL_PREFIX):].split(";")[0]
    return mime_type, encoded


def get_image_dimensions_from_base64(base64_string: str) -> tuple[int, int] | None:
    """Retrieves the width and height of an image from a base64 encoded string.

    Args:
        base64_string: The base64 encoded image data, optionally as a data URL.

    Returns:
        A tuple (width, height) if successful, or None if an error occurs.
    """
    try:
        if base64_string.startswith(DATA_URL_PREFIX):
            _, base64_string = parse_data_url(base64_string)

        image_data = base64.b64decode(base64_string)
        with Image.open(io.BytesIO(image_data)) as img:
            return img.size
    except Exception as e:
        logger.info(f"Error getting image dimensions: {e}")
        return None


def format_resolution(data_url: str) -> str:
    """Returns "WIDTHxHEIGHT" for a data URL image, or "" if unknown."""
    dimensions = get_image_dimensions_from_base64(data_url)
    if not dimensions:
        return ""
    width, height = dimensions
    return f"{width}x{height}"
