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
"""Pet Expression Collage page."""

import uuid

import mesop as me

from common.analytics import log_page_view, log_ui_click, track_click
from components.download_button.download_button import download_button
from components.pet_uploader.pet_uploader import pet_uploader
from config.default import Default
from services.collage_service import (
    begin_generation,
    can_generate,
    reset,
    run_generation,
    select_file,
)
from state.collage_state import PageState
from state.state import AppState

PAGE_NAME = "collage"


def on_load(e: me.LoadEvent):
    app_state = me.state(AppState)
    if not app_state.session_id:
        app_state.session_id = str(uuid.uuid4())
    app_state.current_page = PAGE_NAME
    log_page_view(PAGE_NAME, session_id=app_state.session_id)
    yield


@me.page(
    path="/",
    title="Pet Expression Collage",
    on_load=on_load,
    security_policy=me.SecurityPolicy(
        allowed_script_srcs=["https://cdn.jsdelivr.net"],
    ),
)
def page():
    with me.box(
        style=me.Style(
            background=me.theme_var("background"),
            min_height="100vh",
            padding=me.Padding.symmetric(vertical=48, horizontal=24),
        )
    ):
        with me.box(style=me.Style(max_width=896, margin=me.Margin.symmetric(horizontal="auto"))):
            header()
            collage_content()


@me.component
def header():
    with me.box(style=me.Style(text_align="center", padding=me.Padding.all(16))):
        me.text(Default().APP_TITLE, type="headline-3", style=me.Style(font_weight="bold"))
        me.text(
            "Turn your pet's photo into a fun 3x3 expression grid with a single click!",
            type="subtitle-1",
            style=me.Style(color=me.theme_var("on-surface-variant")),
        )


def collage_content():
    state = me.state(PageState)
    config = Default()

    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="column",
            align_items="center",
            gap=24,
            margin=me.Margin(top=40),
        )
    ):
        if state.error_message:
            error_alert(state.error_message)

        if not state.generated_image_url:
            pet_uploader(
                key=f"pet_uploader_{state.uploader_key}",
                preview_url=state.preview_url,
                on_upload=on_upload,
                accepted_file_types=config.ACCEPTED_FILE_TYPES,
                max_upload_mb=config.MAX_UPLOAD_MB,
                disabled=state.is_loading,
            )

        if state.is_loading:
            with me.box(style=me.Style(display="flex", flex_direction="column", align_items="center", gap=16)):
                me.progress_spinner()
                me.text("AI is creating your collage...", style=me.Style(color=me.theme_var("on-surface-variant")))

        if state.generated_image_url and not state.is_loading:
            result_display(state.generated_image_url, state.generated_resolution, config.DOWNLOAD_FILE_NAME)

        if not state.is_loading and not state.generated_image_url:
            me.button(
                "Generate Collage",
                on_click=on_generate_click,
                type="flat",
                disabled=not can_generate(state),
            )

        if state.generated_image_url and not state.is_loading:
            me.button("Create Another", on_click=on_reset_click, type="flat")


@me.component
def error_alert(message: str):
    with me.box(
        style=me.Style(
            background="#fee2e2",
            border=me.Border.all(me.BorderSide(width=1, style="solid", color="#f87171")),
            border_radius=8,
            color="#b91c1c",
            padding=me.Padding.symmetric(vertical=12, horizontal=16),
            max_width=448,
            width="100%",
        )
    ):
        me.text("Oops! ", style=me.Style(font_weight="bold", display="inline"))
        me.text(message, style=me.Style(display="inline"))


@me.component
def result_display(image_url: str, resolution: str, file_name: str):
    with me.box(style=me.Style(max_width=512, width="100%", display="flex", flex_direction="column", gap=16, align_items="center")):
        with me.box(
            style=me.Style(
                background=me.theme_var("surface"),
                border_radius=12,
                box_shadow=me.theme_var("shadow_elevation_2"),
                padding=me.Padding.all(8),
                width="100%",
            )
        ):
            me.image(
                src=image_url,
                style=me.Style(width="100%", height="auto", object_fit="contain", border_radius=8),
            )
        if resolution:
            me.text(resolution, style=me.Style(font_size=12, color=me.theme_var("on-surface-variant")))
        download_button(url=image_url, file_name=file_name, on_download=on_download)


# --- Event Handlers ---

def on_upload(e: me.UploadEvent):
    state = me.state(PageState)
    select_file(state, e.files[0])
    yield


async def on_generate_click(e: me.ClickEvent):
    state = me.state(PageState)
    app_state = me.state(AppState)
    log_ui_click(
        element_id="generate_collage_button",
        page_name=PAGE_NAME,
        session_id=app_state.session_id,
        extras={"file_name": state.source_file_name},
    )

    token = begin_generation(state)
    yield
    if token is None:
        return

    await run_generation(state, token)
    yield


@track_click(element_id="create_another_button")
def on_reset_click(e: me.ClickEvent):
    reset(me.state(PageState))
    yield


@track_click(element_id="download_collage_button")
def on_download(e: me.WebEvent):
    yield
