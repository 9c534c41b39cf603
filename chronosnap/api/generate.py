"""
Purpose:
- Server-side proxy for the image generation call, so the Gemini key never ships to the browser.
- Takes the photo as an upload plus either a catalog scene_id or a free-text prompt.
"""

import base64
import logging
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ..catalog.eras import find_scene
from ..catalog.schema import Scene
from ..generation.client import (
    GenerationConfigError,
    ImageGenerationClient,
    NoImageProducedError,
    get_generation_client,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generate"])

def _error(status: int, msg: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"ok": False, "error": msg})

@router.post("/generate")
async def generate(
    image: UploadFile = File(...),
    scene_id: str | None = Form(default=None),
    prompt: str | None = Form(default=None),
    gen: ImageGenerationClient = Depends(get_generation_client),
):
    # 1) Resolve the scene: catalog id wins, otherwise wrap the free text
    if scene_id:
        scene = find_scene(scene_id)
        if scene is None:
            return _error(404, f"unknown scene: {scene_id}")
    elif prompt and prompt.strip():
        scene = Scene.custom(prompt)
    else:
        return _error(422, "Por favor describe el lugar primero.")

    # 2) Photo -> bare base64; the client declares it as JPEG whatever the upload type says
    raw = await image.read()
    photo = base64.b64encode(raw).decode("ascii")

    # 3) One blocking SDK call, off the event loop
    try:
        result = await run_in_threadpool(gen.generate, photo, scene.generation_prompt)
    except GenerationConfigError as e:
        return _error(503, str(e))
    except NoImageProducedError as e:
        return _error(502, str(e))
    except Exception as e:
        logger.warning("generation failed for scene %s: %r", scene.id, e)
        return _error(502, f"generation-failed: {e}")

    return {"ok": True, "scene_id": scene.id, "image": result}
