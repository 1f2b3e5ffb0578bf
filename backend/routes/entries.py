from typing import List

from fastapi import APIRouter, Depends

from backend.dependencies import get_entry_log
from backend.schemas.analysis_schema import AnalysisResult, ErrorResponse
from backend.services.entry_log import EntryLog

router = APIRouter(prefix="/entries", tags=["Entries"])


@router.get("", response_model=List[AnalysisResult], summary="전체 기록 (저장 순서)")
def list_entries(log: EntryLog = Depends(get_entry_log)):
    return log.list_all()


@router.get(
    "/{index}",
    response_model=AnalysisResult,
    responses={404: {"model": ErrorResponse}},
    summary="기록 1건 조회 (0부터)",
)
def get_entry(index: int, log: EntryLog = Depends(get_entry_log)):
    return log.get(index)
