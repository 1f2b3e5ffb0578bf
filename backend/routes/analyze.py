from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from backend.dependencies import get_artifacts, get_entry_log, get_vision_client
from backend.schemas.analysis_schema import AnalyzeResponse, ErrorResponse
from backend.services.analyze_service import analyze_upload
from backend.services.artifacts import ArtifactStore
from backend.services.entry_log import EntryLog
from backend.utils.vision_client import VisionClient

router = APIRouter(tags=["Analyze"])


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse},
               500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="음식 사진 분석",
    description="""
멀티파트 `image` 필드의 사진 1장을 외부 비전 모델로 분석합니다.

- 성공: `{"jsonFileName": "<stem>-content.json"}` → `GET /processed/{jsonFileName}` 로 결과 조회
- 실패: `{"error": "..."}` + 4xx/5xx
""",
)
def analyze(
    image: Optional[UploadFile] = File(None),
    client: VisionClient = Depends(get_vision_client),
    artifacts: ArtifactStore = Depends(get_artifacts),
    log: EntryLog = Depends(get_entry_log),
):
    # 외부 호출이 블로킹이라 sync 핸들러(스레드풀)로 둔다
    raw = image.file.read() if image is not None else None
    handle = analyze_upload(
        raw,
        image.filename if image is not None else None,
        image.content_type if image is not None else None,
        client,
        artifacts,
        log,
    )
    return {"jsonFileName": handle}
