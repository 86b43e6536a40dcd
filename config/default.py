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

"""Application configuration, read from the environment."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from common.error_handling import ConfigurationError
from config.gemini_image_models import get_gemini_image_model_config

load_dotenv(override=True)


@dataclass
class Default:
    """Defaults for the Pet Expression Collage app."""

    # pylint: disable=invalid-name

    # Gemini Developer API credential; required.
    API_KEY: str = field(default_factory=lambda: os.environ.get("API_KEY", ""))
    MODEL_ID: str = field(
        default_factory=lambda: os.environ.get(
            "MODEL_ID", "gemini-2.5-flash-image-preview"
        )
    )

    APP_TITLE: str = "Pet Expression Collage"
    DOWNLOAD_FILE_NAME: str = "pet-collage.png"

    # Soft guideline shown in the uploader; not enforced.
    MAX_UPLOAD_MB: int = 10
    ACCEPTED_FILE_TYPES: list[str] = field(
        default_factory=lambda: [
            "image/jpeg",
            "image/png",
            "image/gif",
            "image/webp",
        ]
    )

    def validate(self) -> "Default":
        """Raises ConfigurationError if the app cannot start with these settings."""
        if not self.API_KEY:
            raise ConfigurationError(
                "API_KEY environment variable not set. Please set your Gemini API key."
            )
        if get_gemini_image_model_config(self.MODEL_ID) is None:
            raise ConfigurationError(f"Unsupported image model: {self.MODEL_ID}")
        return self
