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

"""Pet expression collage generation with Gemini image models."""

import base64

from google import genai
from google.genai import types

from common.analytics import get_logger, track_model_call
from common.error_handling import GenerationError
from common.utils import to_data_url
from config.collage_prompt import COLLAGE_PROMPT
from config.default import Default
from config.gemini_image_models import get_gemini_image_model_config
from models.image_payload import EncodedPayload

logger = get_logger(__name__)

GENERATION_FAILED_MESSAGE = "Failed to generate image due to an API error."
DEFAULT_OUTPUT_MIME_TYPE = "image/png"


def init_client() -> genai.Client:
    """Initializes the GenAI client."""
    return genai.Client(api_key=Default().API_KEY)


def build_contents(payload: EncodedPayload, prompt: str = COLLAGE_PROMPT) -> types.Content:
    """Builds the request content: the photo first, then the instruction."""
    return types.Content(
        role="user",
        parts=[
            types.Part(
                inline_data=types.Blob(
                    data=payload.decoded(),
                    mime_type=payload.mime_type,
                )
            ),
            types.Part(text=prompt),
        ],
    )


def extract_image_data_url(response: types.GenerateContentResponse) -> str | None:
    """Returns the first inline image of the first candidate as a data URL.

    Text parts are skipped. Returns None when the model produced no image.
    """
    if not response.candidates:
        return None

    content = response.candidates[0].content
    if not content or not content.parts:
        return None

    for part in content.parts:
        if part.inline_data and part.inline_data.data:
            data = part.inline_data.data
            if isinstance(data, bytes):
                data = base64.b64encode(data).decode("ascii")
            mime_type = part.inline_data.mime_type or DEFAULT_OUTPUT_MIME_TYPE
            return to_data_url(mime_type, data)
    return None


async def generate_pet_collage(
    payload: EncodedPayload,
    *,
    prompt: str = COLLAGE_PROMPT,
    client: genai.Client | None = None,
    model_id: str | None = None,
) -> str | None:
    """Sends the photo and prompt to Gemini and returns the collage.

    Args:
        payload: The encoded pet photo.
        prompt: The instruction text; the fixed collage prompt by default.
        client: Optional GenAI client, created from config when omitted.
        model_id: Optional model override, the configured model by default.

    Returns:
        A data URL of the generated image, or None if no image was returned.

    Raises:
        GenerationError: on any transport, authentication or response error.
    """
    model_name = model_id or Default().MODEL_ID
    model_config = get_gemini_image_model_config(model_name)
    response_modalities = (
        model_config.response_modalities if model_config else ["IMAGE", "TEXT"]
    )

    logger.info(
        f"Calling generate_content with model: {model_name} ({payload.mime_type})"
    )
    try:
        if client is None:
            client = init_client()
        with track_model_call(model_name, mime_type=payload.mime_type):
            response = await client.aio.models.generate_content(
                model=model_name,
                contents=build_contents(payload, prompt),
                config=types.GenerateContentConfig(
                    response_modalities=response_modalities,
                ),
            )
        image_url = extract_image_data_url(response)
    except Exception as e:
        logger.error(f"Error generating image with Gemini API: {e}", exc_info=True)
        raise GenerationError(GENERATION_FAILED_MESSAGE) from e

    if not image_url:
        logger.warning("No image part found in Gemini API response.")
        return None

    logger.info("Collage image received.")
    return image_url
