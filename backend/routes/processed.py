from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from backend.config import Settings
from backend.dependencies import get_settings_dep

router = APIRouter(prefix="/processed", tags=["Artifacts"])


@router.get("/{file_name}", summary="저장된 이미지 / 결과 JSON 원본")
def processed_file(file_name: str, settings: Settings = Depends(get_settings_dep)):
    root = settings.processed_dir.resolve()
    path = (root / file_name).resolve()
    # processed/ 밖으로 나가는 경로는 없는 파일 취급
    if path.parent != root or not path.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(path)
