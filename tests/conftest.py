"""공용 pytest fixture"""

import base64
import json
from pathlib import Path
from typing import List, Optional, Union

import pytest
from fastapi.testclient import TestClient

from backend.config import Settings
from backend.dependencies import get_vision_client
from backend.main import create_app


PNG_1X1_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAwMCAO7+fJ8AAAAASUVORK5CYII="
)

APPLE_ANSWER = json.dumps({
    "content": {
        "item_name": "Apple",
        "calories": "95",
        "score": "4",
        "description": "A fruit.",
        "sugar": "19",
        "protein": "0",
        "fat": "0",
        "sustainable_alternatives": ["local apple"],
    }
})


class FakeVisionClient:
    """describe() 호출을 기록하고 미리 정한 응답(또는 예외)을 돌려준다."""

    def __init__(self, answer: Union[str, Exception] = APPLE_ANSWER):
        self.answer = answer
        self.calls: List[dict] = []

    def describe(self, image_bytes: bytes, mime_type: str = "image/jpeg", prompt: Optional[str] = None) -> str:
        self.calls.append({"bytes": image_bytes, "mime_type": mime_type, "prompt": prompt})
        if isinstance(self.answer, Exception):
            raise self.answer
        return self.answer


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "data", openai_api_key="test-key")


@pytest.fixture
def fake_vision() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def app(settings: Settings, fake_vision: FakeVisionClient):
    application = create_app(settings)
    application.dependency_overrides[get_vision_client] = lambda: fake_vision
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def upload():
    def _upload(client: TestClient, data: bytes = PNG_1X1_BYTES, filename: str = "meal.png"):
        return client.post("/analyze", files={"image": (filename, data, "image/png")})
    return _upload


def data_files(root: Path) -> List[Path]:
    if not root.exists():
        return []
    return sorted(p for p in root.rglob("*") if p.is_file())
