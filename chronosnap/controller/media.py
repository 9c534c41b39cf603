"""
Purpose:
- Platform seams for photo acquisition: camera streams, still capture, file ingestion.
- The controller only sees these protocols; real cameras or test fakes plug in behind them.

Notes:
- Stills are drawn onto a raster sized to the stream's current video dimensions, so
  nothing is stretched or clipped.
- Uploads are not size/type checked; whatever the platform can decode is accepted.
"""

from __future__ import annotations
import asyncio
import mimetypes
from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence, Union

from PIL import Image

from ..services.data_uri import to_data_uri

STILL_MIME_TYPE = "image/jpeg"
FALLBACK_MIME_TYPE = "application/octet-stream"

class MediaTrack(Protocol):
    def stop(self) -> None: ...

class MediaStream(Protocol):
    tracks: Sequence[MediaTrack]
    video_width: int
    video_height: int

    def current_frame(self) -> Any:
        """Latest decoded frame: a PIL image or an HxWx3 uint8 array."""
        ...

class Camera(Protocol):
    async def open(self, facing_mode: str = "user") -> MediaStream: ...

class CameraNotReadyError(Exception):
    """The stream has no frame dimensions yet (metadata not loaded)."""

def stop_stream(stream: Optional[MediaStream]) -> None:
    if stream is None:
        return
    for track in stream.tracks:
        track.stop()

def capture_still(stream: MediaStream, quality: int = 92) -> str:
    """
    Sample the current frame into a JPEG data URI at the stream's native resolution.
    """
    width, height = int(stream.video_width), int(stream.video_height)
    if width <= 0 or height <= 0:
        raise CameraNotReadyError(f"video has no dimensions yet ({width}x{height})")

    frame = stream.current_frame()
    if not isinstance(frame, Image.Image):
        frame = Image.fromarray(frame)

    # off-screen buffer, drawn at the origin like a canvas drawImage(video, 0, 0)
    canvas = Image.new("RGB", (width, height))
    canvas.paste(frame.convert("RGB"), (0, 0))

    buf = BytesIO()
    canvas.save(buf, format="JPEG", quality=quality)
    return to_data_uri(buf.getvalue(), STILL_MIME_TYPE)

def _sniff_mime(raw: bytes) -> Optional[str]:
    try:
        with Image.open(BytesIO(raw)) as img:
            return Image.MIME.get(img.format or "")
    except Exception:
        return None

FileSource = Union[str, Path, bytes]

async def read_file_as_data_uri(source: FileSource, mime_type: Optional[str] = None) -> str:
    """
    Read a user-selected file into a data URI without blocking the event loop.
    MIME: explicit argument, else file extension, else sniffed by Pillow.
    """
    if isinstance(source, (bytes, bytearray)):
        raw = bytes(source)
        guessed = None
    else:
        path = Path(source)
        raw = await asyncio.to_thread(path.read_bytes)
        guessed, _ = mimetypes.guess_type(path.name)

    mime = mime_type or guessed or _sniff_mime(raw) or FALLBACK_MIME_TYPE
    return to_data_uri(raw, mime)
