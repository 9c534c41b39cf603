"""
Shared fixtures: in-memory redis, fake camera/streams, a JPEG photo, and a TestClient
with the store and generator dependencies swapped out.
"""

import base64
from io import BytesIO

import fakeredis
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from chronosnap.main import create_app
from chronosnap.generation.client import get_generation_client
from chronosnap.visits.store import VisitLogStore, get_visit_store


def make_jpeg(size=(8, 6), color=(200, 30, 30)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, color).save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture
def jpeg_bytes():
    return make_jpeg()


@pytest.fixture
def photo_uri(jpeg_bytes):
    return "data:image/jpeg;base64," + base64.b64encode(jpeg_bytes).decode("ascii")


@pytest.fixture
def fake_redis():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def visit_store(fake_redis):
    return VisitLogStore(fake_redis, key="access_logs", fetch_limit=100)


class FakeGenerator:
    """Records calls; returns `result` or raises `error`."""

    model = "fake-image-model"
    configured = True

    def __init__(self, result="data:image/png;base64,UkVTVUxU", error=None):
        self.result = result
        self.error = error
        self.calls = []

    def generate(self, image, scene_prompt):
        self.calls.append((image, scene_prompt))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_generator():
    return FakeGenerator()


class FakeTrack:
    def __init__(self):
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakeStream:
    def __init__(self, width=32, height=24, color=(10, 120, 240)):
        self.tracks = [FakeTrack(), FakeTrack()]
        self.video_width = width
        self.video_height = height
        self._frame = Image.new("RGB", (width, height), color)

    def current_frame(self):
        return self._frame

    @property
    def all_stopped(self):
        return all(t.stopped for t in self.tracks)


class FakeCamera:
    def __init__(self, stream=None, error=None):
        self.stream = stream or FakeStream()
        self.error = error
        self.requests = []

    async def open(self, facing_mode="user"):
        self.requests.append(facing_mode)
        if self.error is not None:
            raise self.error
        return self.stream


@pytest.fixture
def fake_camera():
    return FakeCamera()


@pytest.fixture
def app(visit_store, fake_generator):
    app = create_app()
    app.dependency_overrides[get_visit_store] = lambda: visit_store
    app.dependency_overrides[get_generation_client] = lambda: fake_generator
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
