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

"""Shared fixtures for the collage tests."""

import io
import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types
from PIL import Image

# Keep logging local; the Cloud Logging handler is only for Cloud Run.
os.environ.pop("K_SERVICE", None)


class FakeUpload(io.BytesIO):
    """Stands in for mesop.UploadedFile: a BytesIO with name and mime_type."""

    def __init__(self, contents: bytes, name: str = "", mime_type: str = ""):
        super().__init__(contents)
        self.name = name
        self.mime_type = mime_type
        self.size = len(contents)


def make_jpeg_bytes(color=(200, 120, 40), size=(64, 48)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=color).save(buf, format="JPEG")
    return buf.getvalue()


def make_png_bytes(size=(30, 20)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(0, 0, 255)).save(buf, format="PNG")
    return buf.getvalue()


def image_part(data: bytes, mime_type: str = "image/png") -> types.Part:
    return types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))


def text_part(text: str) -> types.Part:
    return types.Part(text=text)


def make_response(*candidate_parts: list[types.Part]) -> types.GenerateContentResponse:
    """Builds a response with one candidate per list of parts."""
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(content=types.Content(role="model", parts=parts))
            for parts in candidate_parts
        ]
    )


def make_client(response=None, error: Exception | None = None) -> MagicMock:
    """A genai.Client double whose async generate_content returns or raises."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=response, side_effect=error
    )
    return client


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_jpeg_bytes()


@pytest.fixture
def cat_upload(jpeg_bytes) -> FakeUpload:
    return FakeUpload(jpeg_bytes, name="cat.jpg", mime_type="image/jpeg")
