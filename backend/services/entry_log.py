from __future__ import annotations

import json
import os
import threading
from pathlib import Path
from typing import Any, Dict, List

from backend.errors import IndexOutOfRange, PersistenceFailed
from backend.schemas.analysis_schema import AnalysisResult
from backend.utils.logger import get_logger

logger = get_logger(__name__)


class EntryLog:
    """
    entries.json: 지금까지의 AnalysisResult 전부를 제출 순서대로 담은 JSON 배열 하나.
    append 는 전체 읽기 → 추가 → 전체 쓰기이며, 프로세스 안에서는 lock 으로 직렬화한다.
    여러 프로세스가 같은 파일을 쓰는 경우는 보호하지 않는다.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceFailed(f"failed to read entries: {e}")
        if not isinstance(data, list):
            raise PersistenceFailed(f"{self.path} does not hold a JSON array")
        return data

    def _write(self, entries: List[Dict[str, Any]]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(entries, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp, self.path)
        except OSError as e:
            raise PersistenceFailed(f"failed to update entries file: {e}")

    def append(self, result: AnalysisResult) -> int:
        """추가된 위치(0부터)를 돌려준다."""
        with self._lock:
            entries = self._read()
            entries.append(result.model_dump())
            self._write(entries)
            return len(entries) - 1

    def list_all(self) -> List[Dict[str, Any]]:
        with self._lock:
            return self._read()

    def get(self, index: int) -> Dict[str, Any]:
        entries = self.list_all()
        if index < 0 or index >= len(entries):
            raise IndexOutOfRange(f"index {index} not in [0, {len(entries)})")
        return entries[index]

    def __len__(self) -> int:
        return len(self.list_all())
