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

"""
Component for uploading the pet photo and previewing it.
"""

from typing import Callable

import mesop as me

IMAGE_PLACEHOLDER_STYLE = me.Style(
    width=400,
    height=256,
    border=me.Border.all(
        me.BorderSide(width=2, style="dashed", color=me.theme_var("outline-variant")),
    ),
    border_radius=12,
    display="flex",
    align_items="center",
    justify_content="center",
    flex_direction="column",
    gap=8,
    overflow_x="hidden",
    overflow_y="hidden",
)


@me.component
def pet_uploader(
    *,
    preview_url: str,
    on_upload: Callable,
    accepted_file_types: list[str],
    max_upload_mb: int,
    disabled: bool = False,
    key: str | None = None,
):
    """Uploader button above a dashed box showing the preview or a hint."""
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="column",
            gap=12,
            align_items="center",
        )
    ):
        with me.box(style=IMAGE_PLACEHOLDER_STYLE):
            if preview_url:
                me.image(
                    src=preview_url,
                    style=me.Style(
                        height="100%",
                        width="100%",
                        object_fit="cover",
                    ),
                )
            else:
                me.icon("upload")
                me.text("Upload your pet's photo", style=me.Style(font_weight=500))
                me.text(
                    f"PNG, JPG, GIF up to {max_upload_mb}MB",
                    style=me.Style(font_size=12, color=me.theme_var("on-surface-variant")),
                )
        me.uploader(
            key=key,
            label="Choose Photo" if not preview_url else "Choose Another Photo",
            on_upload=on_upload,
            accepted_file_types=accepted_file_types,
            type="stroked",
            disabled=disabled,
        )
