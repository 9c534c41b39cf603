"""
Purpose:
- The app's screen state machine: HOME -> CAPTURE -> SELECT -> PROCESSING -> RESULT.
- Owns the captured photo, selected scene, custom prompt, result, camera stream and
  the single user-visible error slot.

Concurrency:
- Runs on one asyncio loop. State changes are synchronous; the generation call and the
  visit beacon run as tasks.
- In-flight generations are never cancelled. Each one carries a token; a reply whose
  token is stale (reset, teardown or a newer generation) is dropped.
"""

from __future__ import annotations
import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Tuple

from ..catalog.eras import ERAS
from ..catalog.schema import Era, Scene
from ..core.settings import settings
from ..services.data_uri import decode_data_uri
from .beacon import VisitBeacon
from .media import Camera, CameraNotReadyError, FileSource, MediaStream, capture_still, read_file_as_data_uri, stop_stream

logger = logging.getLogger(__name__)

CAMERA_ERROR = "No se pudo acceder a la cámara. Por favor verifica los permisos."
CAMERA_NOT_READY_ERROR = "La cámara aún no está lista. Inténtalo de nuevo en un momento."
BLANK_PROMPT_ERROR = "Por favor describe el lugar primero."
GENERATION_ERROR = "Error al viajar en el tiempo. Inténtalo de nuevo. "

class AppState(str, Enum):
    HOME = "HOME"
    CAPTURE = "CAPTURE"
    SELECT = "SELECT"
    PROCESSING = "PROCESSING"
    RESULT = "RESULT"

class ImageGenerator(Protocol):
    def generate(self, image: str, scene_prompt: str) -> str: ...

@dataclass(frozen=True)
class DownloadArtifact:
    filename: str
    mime_type: str
    data: bytes

class AppController:
    def __init__(
        self,
        generator: ImageGenerator,
        camera: Optional[Camera] = None,
        beacon: Optional[VisitBeacon] = None,
        download_label: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._generator = generator
        self._camera = camera
        self._beacon = beacon
        self._download_label = download_label or settings.download_label
        self._clock = clock

        self.state = AppState.HOME
        self.captured_image: Optional[str] = None
        self.selected_scene: Optional[Scene] = None
        self.custom_prompt = ""
        self.result_image: Optional[str] = None
        self.error: Optional[str] = None
        self.stream: Optional[MediaStream] = None

        self._generation_token = 0
        self._generation_task: Optional[asyncio.Task] = None
        self._beacon_task: Optional[asyncio.Task] = None

    @property
    def eras(self) -> Tuple[Era, ...]:
        return ERAS

    @property
    def is_processing(self) -> bool:
        return self.state is AppState.PROCESSING

    # --- lifecycle -----------------------------------------------------------

    def mount(self) -> Optional[asyncio.Task]:
        """Fire the visit beacon once; its outcome never reaches the UI."""
        if self._beacon is None:
            return None
        self._beacon_task = asyncio.get_running_loop().create_task(self._send_beacon())
        return self._beacon_task

    async def _send_beacon(self) -> None:
        try:
            await self._beacon.send()
        except Exception as e:
            logger.error("Analytics error: %r", e)

    def close(self) -> None:
        self.stop_camera()
        self._generation_token += 1

    # --- errors --------------------------------------------------------------

    def set_error(self, message: str) -> None:
        self.error = message

    def dismiss_error(self) -> None:
        self.error = None

    # --- navigation ----------------------------------------------------------

    def start_adventure(self) -> None:
        if self.state is AppState.HOME:
            self.state = AppState.CAPTURE

    def reset(self) -> None:
        self.stop_camera()
        self._generation_token += 1
        self.captured_image = None
        self.result_image = None
        self.selected_scene = None
        self.custom_prompt = ""
        self.error = None
        self.state = AppState.HOME

    def try_another_destination(self) -> None:
        if self.state is AppState.RESULT and self.captured_image:
            self.state = AppState.SELECT

    # --- camera --------------------------------------------------------------

    async def start_camera(self) -> bool:
        if self.stream is not None:
            return True
        try:
            if self._camera is None:
                raise RuntimeError("no camera available")
            stream = await self._camera.open(facing_mode="user")
        except Exception as e:
            logger.error("Error accessing camera: %r", e)
            self.set_error(CAMERA_ERROR)
            return False

        # user left Capture while the permission prompt was open
        if self.state is not AppState.CAPTURE:
            stop_stream(stream)
            return False
        # an overlapping call already attached a stream; keep that one
        if self.stream is not None:
            stop_stream(stream)
            return True
        self.stream = stream
        return True

    def stop_camera(self) -> None:
        if self.stream is not None:
            stop_stream(self.stream)
            self.stream = None

    def take_photo(self) -> bool:
        if self.stream is None:
            return False
        try:
            self.captured_image = capture_still(self.stream)
        except CameraNotReadyError as e:
            logger.warning("capture before video metadata: %s", e)
            self.set_error(CAMERA_NOT_READY_ERROR)
            return False
        self.stop_camera()
        self.state = AppState.SELECT
        return True

    # --- upload --------------------------------------------------------------

    async def upload_file(self, source: FileSource, mime_type: Optional[str] = None) -> bool:
        data_uri = await read_file_as_data_uri(source, mime_type)
        if self.state is not AppState.CAPTURE:
            logger.debug("upload finished after leaving capture; dropped")
            return False
        self.captured_image = data_uri
        self.stop_camera()
        self.state = AppState.SELECT
        return True

    # --- generation ----------------------------------------------------------

    def set_custom_prompt(self, text: str) -> None:
        self.custom_prompt = text

    def begin_generation(self, scene: Scene) -> Optional[asyncio.Task]:
        """
        Enter PROCESSING now and schedule the generation call.
        Returns the task, or None when there is no photo yet.
        """
        if not self.captured_image:
            return None

        self._generation_token += 1
        token = self._generation_token
        self.selected_scene = scene
        self.result_image = None
        self.error = None
        self.state = AppState.PROCESSING

        self._generation_task = asyncio.get_running_loop().create_task(
            self._run_generation(token, self.captured_image, scene)
        )
        return self._generation_task

    def generate_custom(self) -> Optional[asyncio.Task]:
        if not self.custom_prompt.strip():
            self.set_error(BLANK_PROMPT_ERROR)
            return None
        return self.begin_generation(Scene.custom(self.custom_prompt))

    async def _run_generation(self, token: int, image: str, scene: Scene) -> None:
        try:
            result = await asyncio.to_thread(self._generator.generate, image, scene.generation_prompt)
        except Exception as e:
            if token != self._generation_token:
                logger.info("dropping stale generation failure for %s: %r", scene.id, e)
                return
            logger.error("generation failed for %s: %r", scene.id, e)
            self.set_error(GENERATION_ERROR + str(e))
            self.state = AppState.SELECT
            return

        if token != self._generation_token:
            logger.info("dropping stale generation result for %s", scene.id)
            return
        self.result_image = result
        self.error = None
        self.state = AppState.RESULT

    # --- result --------------------------------------------------------------

    def download_filename(self) -> str:
        return f"{self._download_label}-{int(self._clock() * 1000)}.jpg"

    def download(self) -> Optional[DownloadArtifact]:
        if self.state is not AppState.RESULT or not self.result_image:
            return None
        mime, data = decode_data_uri(self.result_image)
        return DownloadArtifact(filename=self.download_filename(), mime_type=mime, data=data)
