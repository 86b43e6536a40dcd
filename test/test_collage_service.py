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

import logging
from functools import partial

import pytest

from common.error_handling import GenerationError
from common.utils import format_resolution
from models.collage import generate_pet_collage
from services.collage_service import (
    EMPTY_RESULT_MESSAGE,
    NO_FILE_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    UIStatus,
    begin_generation,
    can_generate,
    finish_generation,
    reset,
    run_generation,
    select_file,
    ui_status,
)
from state.collage_state import PageState
from conftest import FakeUpload, image_part, make_client, make_jpeg_bytes, make_response


@pytest.fixture
def state() -> PageState:
    return PageState()


def test_new_state_is_idle(state):
    assert ui_status(state) is UIStatus.IDLE
    assert not can_generate(state)


def test_select_file_moves_to_file_selected_with_preview(state, cat_upload):
    assert select_file(state, cat_upload)

    assert ui_status(state) is UIStatus.FILE_SELECTED
    assert state.source_file_name == "cat.jpg"
    assert state.preview_url.startswith("data:image/jpeg;base64,")
    assert can_generate(state)


def test_generate_without_file_sets_input_message(state):
    assert begin_generation(state) is None

    assert state.error_message == NO_FILE_MESSAGE
    assert not state.is_loading


def test_begin_generation_is_single_flight(state, cat_upload):
    select_file(state, cat_upload)

    token = begin_generation(state)

    assert token is not None
    assert ui_status(state) is UIStatus.LOADING
    assert not can_generate(state)
    assert begin_generation(state) is None


def test_select_file_is_ignored_while_loading(state, cat_upload, jpeg_bytes):
    select_file(state, cat_upload)
    begin_generation(state)

    other = FakeUpload(jpeg_bytes, name="dog.jpg", mime_type="image/jpeg")

    assert not select_file(state, other)
    assert state.source_file_name == "cat.jpg"
    assert state.is_loading


def test_select_file_after_failure_clears_error(state, cat_upload, jpeg_bytes):
    select_file(state, cat_upload)
    token = begin_generation(state)
    finish_generation(state, token, error_message=UNEXPECTED_ERROR_MESSAGE)
    assert ui_status(state) is UIStatus.FAILED

    select_file(state, FakeUpload(jpeg_bytes, name="dog.jpg", mime_type="image/jpeg"))

    assert ui_status(state) is UIStatus.FILE_SELECTED
    assert state.error_message == ""
    assert state.source_file_name == "dog.jpg"


def test_select_non_image_shows_message(state):
    select_file(state, FakeUpload(b"hello", name="notes.txt", mime_type="text/plain"))

    assert state.error_message == "Please select an image file."
    assert state.preview_url == ""


def test_unreadable_file_shows_generic_message(state, jpeg_bytes):
    upload = FakeUpload(jpeg_bytes, name="cat.jpg", mime_type="image/jpeg")
    upload.close()

    assert not select_file(state, upload)
    assert state.source_image is None
    assert state.error_message == UNEXPECTED_ERROR_MESSAGE


def test_reset_clears_everything_at_once(state, cat_upload):
    select_file(state, cat_upload)
    token = begin_generation(state)
    finish_generation(state, token, image_url="data:image/png;base64,QUJD")
    assert ui_status(state) is UIStatus.SUCCESS

    reset(state)

    assert ui_status(state) is UIStatus.IDLE
    assert state.source_image is None
    assert state.preview_url == ""
    assert state.generated_image_url == ""
    assert state.error_message == ""
    assert state.is_loading is False


def test_result_after_reset_is_discarded(state, cat_upload):
    select_file(state, cat_upload)
    token = begin_generation(state)

    reset(state)

    assert not finish_generation(state, token, image_url="data:image/png;base64,QUJD")
    assert ui_status(state) is UIStatus.IDLE
    assert state.generated_image_url == ""


async def test_late_response_after_reset_does_not_overwrite(state, cat_upload):
    select_file(state, cat_upload)
    token = begin_generation(state)

    async def slow_generate(payload):
        # The user presses reset while the request is pending.
        reset(state)
        return "data:image/png;base64,QUJD"

    assert not await run_generation(state, token, generate=slow_generate)
    assert ui_status(state) is UIStatus.IDLE


async def test_each_attempt_encodes_afresh(state, cat_upload, jpeg_bytes):
    select_file(state, cat_upload)
    seen = []

    async def generate(payload):
        seen.append(payload)
        return None

    for _ in range(2):
        token = begin_generation(state)
        await run_generation(state, token, generate=generate)

    assert len(seen) == 2
    assert seen[0] == seen[1]
    assert seen[0] is not seen[1]
    assert seen[0].decoded() == jpeg_bytes


async def test_read_error_during_generation_is_generic_failure(state, cat_upload):
    select_file(state, cat_upload)
    token = begin_generation(state)
    cat_upload.close()

    async def generate(payload):
        raise AssertionError("should not be called")

    await run_generation(state, token, generate=generate)

    assert state.error_message == UNEXPECTED_ERROR_MESSAGE
    assert not state.is_loading


async def test_generation_error_keeps_file_for_retry(state, cat_upload):
    select_file(state, cat_upload)
    token = begin_generation(state)

    async def generate(payload):
        raise GenerationError("Failed to generate image due to an API error.")

    await run_generation(state, token, generate=generate)

    assert ui_status(state) is UIStatus.FAILED
    assert can_generate(state)


# End-to-end: selection through the real requester with a mocked service.


async def test_end_to_end_success(state, cat_upload):
    client = make_client(response=make_response([image_part(b"ABC", "image/png")]))

    select_file(state, cat_upload)
    token = begin_generation(state)
    await run_generation(state, token, generate=partial(generate_pet_collage, client=client))

    assert ui_status(state) is UIStatus.SUCCESS
    assert state.generated_image_url == "data:image/png;base64,QUJD"
    assert state.is_loading is False
    sent = client.aio.models.generate_content.await_args.kwargs["contents"]
    assert sent.parts[0].inline_data.mime_type == "image/jpeg"
    assert sent.parts[0].inline_data.data == cat_upload.getvalue()


async def test_end_to_end_empty_candidates(state, cat_upload):
    client = make_client(response=make_response())

    select_file(state, cat_upload)
    token = begin_generation(state)
    await run_generation(state, token, generate=partial(generate_pet_collage, client=client))

    assert ui_status(state) is UIStatus.FAILED
    assert state.error_message == EMPTY_RESULT_MESSAGE
    assert state.is_loading is False


async def test_end_to_end_transport_error(state, cat_upload, caplog):
    client = make_client(error=ConnectionError("TLS handshake timed out"))

    select_file(state, cat_upload)
    token = begin_generation(state)
    with caplog.at_level(logging.ERROR):
        await run_generation(
            state, token, generate=partial(generate_pet_collage, client=client)
        )

    assert ui_status(state) is UIStatus.FAILED
    assert state.error_message == UNEXPECTED_ERROR_MESSAGE
    assert "TLS handshake timed out" not in state.error_message
    assert "TLS handshake timed out" in caplog.text
    assert state.source_image is cat_upload


def test_preview_in_state_is_a_thumbnail_not_the_full_photo(state):
    data = make_jpeg_bytes(size=(2000, 2000))

    select_file(state, FakeUpload(data, name="big.jpg", mime_type="image/jpeg"))

    assert format_resolution(state.preview_url) == "512x512"
    assert state.source_image.getvalue() == data
