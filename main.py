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

"""Pet Expression Collage: FastAPI app hosting the Mesop UI and JSON API."""

import os

import mesop as me
from fastapi import FastAPI
from fastapi.middleware.wsgi import WSGIMiddleware

from common.analytics import configure_logging, get_logger
from config.default import Default

configure_logging()
logger = get_logger(__name__)

# Refuse to start without a credential.
config = Default().validate()
logger.info(f"Starting {config.APP_TITLE} with model {config.MODEL_ID}")

# Registers the Mesop page routes.
import pages.collage  # noqa: E402,F401  pylint: disable=wrong-import-position
from routers.collage_router import router as collage_router  # noqa: E402  pylint: disable=wrong-import-position

app = FastAPI(title=config.APP_TITLE)
app.include_router(collage_router)


@app.get("/health")
async def health():
    return {"status": "ok", "model": config.MODEL_ID}


app.mount(
    "/",
    WSGIMiddleware(
        me.create_wsgi_app(debug_mode=os.environ.get("DEBUG_MODE", "") == "true")
    ),
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", 8080)),
        reload=True,
        reload_includes=["*.py", "*.js"],
        timeout_graceful_shutdown=0,
    )
