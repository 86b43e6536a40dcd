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

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from common.analytics import get_logger
from common.error_handling import InputError, ReadError
from common.utils import parse_data_url
from config.default import Default
from models.collage import generate_pet_collage
from models.image_payload import SourceImage, encode_image
from models.requests import CollageResponse, ErrorResponse
from services.collage_service import (
    EMPTY_RESULT_MESSAGE,
    NO_FILE_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    CollageGenerator,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/collage", tags=["collage"])


def get_collage_generator() -> CollageGenerator:
    """Dependency returning the function that talks to the model."""
    return generate_pet_collage


async def _read_upload(file: UploadFile) -> SourceImage:
    """Reads the multipart upload fully into memory.

    Raises:
        ReadError: if the upload cannot be read.
    """
    name = file.filename or ""
    try:
        data = await file.read()
    except (OSError, ValueError) as e:
        logger.error(f"Could not read uploaded file '{name}': {e}")
        raise ReadError(f"Could not read file '{name}'") from e
    return SourceImage(name=name, mime_type=file.content_type or "", data=data)


@router.post(
    "/generate",
    response_model=CollageResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def generate_collage(
    file: UploadFile | None = File(None),
    generate: CollageGenerator = Depends(get_collage_generator),
):
    """
    Generates a pet expression collage from an uploaded photo.
    Returns the collage as a data URL.
    """
    if file is None:
        raise HTTPException(status_code=400, detail=NO_FILE_MESSAGE)

    try:
        source = await _read_upload(file)
        payload = encode_image(source)
        image_url = await generate(payload)
    except InputError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(
            f"Collage request for '{file.filename}' failed: {e.__cause__ or e}",
            exc_info=True,
        )
        raise HTTPException(status_code=502, detail=UNEXPECTED_ERROR_MESSAGE)

    if not image_url:
        raise HTTPException(status_code=422, detail=EMPTY_RESULT_MESSAGE)

    mime_type, _ = parse_data_url(image_url)
    return CollageResponse(
        image_url=image_url,
        mime_type=mime_type,
        download_file_name=Default().DOWNLOAD_FILE_NAME,
    )
