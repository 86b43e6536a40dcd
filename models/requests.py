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

from pydantic import BaseModel, Field


class CollageResponse(BaseModel):
    """
    Defines the contract for a successful collage generation.
    The image_url is a data URL that can be used directly as an image
    source or a download link.
    """

    image_url: str = Field(..., pattern=r"^data:image/")
    mime_type: str
    download_file_name: str


class ErrorResponse(BaseModel):
    """Body returned for failed collage requests."""

    detail: str
