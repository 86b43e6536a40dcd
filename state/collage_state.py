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

import mesop as me


@me.stateclass
class PageState:
    """Pet Expression Collage Page State"""

    # Input
    source_image: me.UploadedFile = None
    source_file_name: str = ""
    preview_url: str = ""
    uploader_key: int = 0

    # Generation
    is_loading: bool = False
    generation_id: int = 0
    generated_image_url: str = ""
    generated_resolution: str = ""

    # UI
    error_message: str = ""
