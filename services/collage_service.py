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

"""State transitions for the collage page.

Every function here takes the page state and mutates it in place, so the
Mesop event handlers stay thin and the flow can be exercised without a
running UI.
"""

import enum
from typing import Awaitable, Callable

from common.analytics import get_logger
from common.error_handling import InputError, ReadError
from common.utils import format_resolution
from models.collage import generate_pet_collage
from models.image_payload import (
    EncodedPayload,
    SourceImage,
    encode_image,
    make_preview_data_url,
)
from state.collage_state import PageState

logger = get_logger(__name__)

NO_FILE_MESSAGE = "Please select a photo first."
EMPTY_RESULT_MESSAGE = (
    "The AI could not generate an image from the provided photo. "
    "Please try another one."
)
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."

CollageGenerator = Callable[[EncodedPayload], Awaitable[str | None]]


class UIStatus(enum.Enum):
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


def ui_status(state: PageState) -> UIStatus:
    if state.is_loading:
        return UIStatus.LOADING
    if state.generated_image_url:
        return UIStatus.SUCCESS
    if state.error_message:
        return UIStatus.FAILED
    if state.source_image is not None:
        return UIStatus.FILE_SELECTED
    return UIStatus.IDLE


def can_generate(state: PageState) -> bool:
    """Whether the "Generate Collage" action is enabled."""
    return (
        state.source_image is not None
        and not state.is_loading
        and not state.generated_image_url
    )


def _clear_outputs(state: PageState):
    state.generated_image_url = ""
    state.generated_resolution = ""
    state.error_message = ""


def select_file(state: PageState, upload) -> bool:
    """Stores a newly selected photo and clears everything derived from the last one.

    Returns False, leaving the state untouched, while a generation is running.
    """
    if state.is_loading:
        logger.info("Ignoring file selection while a collage is being generated")
        return False

    try:
        source = SourceImage.from_upload(upload)
    except ReadError:
        reset(state)
        state.error_message = UNEXPECTED_ERROR_MESSAGE
        return False

    state.source_image = upload
    state.source_file_name = source.name
    state.preview_url = ""
    _clear_outputs(state)
    # Anything still in flight belongs to the previous photo.
    state.generation_id += 1

    try:
        state.preview_url = make_preview_data_url(source)
    except InputError as e:
        state.error_message = e.message

    logger.info(f"Selected '{source.name}' ({source.mime_type}, {source.size} bytes)")
    return True


def begin_generation(state: PageState) -> int | None:
    """Moves to the loading state and returns the token for this request.

    Returns None when generation cannot start.
    """
    if state.is_loading:
        return None
    if state.source_image is None:
        state.error_message = NO_FILE_MESSAGE
        return None

    state.is_loading = True
    _clear_outputs(state)
    state.generation_id += 1
    return state.generation_id


def finish_generation(
    state: PageState,
    token: int,
    image_url: str | None = None,
    error_message: str | None = None,
) -> bool:
    """Applies the outcome of request `token`, unless it has been superseded."""
    if token != state.generation_id:
        logger.info(
            f"Discarding stale collage result for request {token} (current {state.generation_id})"
        )
        return False

    state.is_loading = False
    if image_url:
        state.generated_image_url = image_url
        state.generated_resolution = format_resolution(image_url)
        state.error_message = ""
    else:
        state.generated_image_url = ""
        state.error_message = error_message or EMPTY_RESULT_MESSAGE
    return True


async def run_generation(
    state: PageState,
    token: int,
    generate: CollageGenerator = generate_pet_collage,
) -> bool:
    """Encodes the selected photo, requests the collage and records the outcome."""
    try:
        payload = encode_image(SourceImage.from_upload(state.source_image))
        image_url = await generate(payload)
    except InputError as e:
        return finish_generation(state, token, error_message=e.message)
    except Exception as e:
        logger.error(f"Collage generation failed: {e}", exc_info=True)
        return finish_generation(state, token, error_message=UNEXPECTED_ERROR_MESSAGE)

    if not image_url:
        return finish_generation(state, token, error_message=EMPTY_RESULT_MESSAGE)
    return finish_generation(state, token, image_url=image_url)


def reset(state: PageState):
    """Returns the page to idle, dropping any result still in flight."""
    state.source_image = None
    state.source_file_name = ""
    state.preview_url = ""
    state.is_loading = False
    _clear_outputs(state)
    state.generation_id += 1
    state.uploader_key += 1
