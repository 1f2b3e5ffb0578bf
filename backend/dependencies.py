from fastapi import Request

from backend.config import Settings
from backend.services.artifacts import ArtifactStore
from backend.services.entry_log import EntryLog
from backend.utils.vision_client import VisionClient


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_vision_client(request: Request) -> VisionClient:
    return request.app.state.vision_client


def get_artifacts(request: Request) -> ArtifactStore:
    return request.app.state.artifacts


def get_entry_log(request: Request) -> EntryLog:
    return request.app.state.entry_log
