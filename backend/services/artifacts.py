import json
import secrets
import shutil
from pathlib import Path

from backend.errors import PersistenceFailed
from backend.schemas.analysis_schema import AnalysisResult
from backend.utils.logger import get_logger

logger = get_logger(__name__)

DOCUMENT_SUFFIX = "-content.json"


class ArtifactStore:
    """
    업로드 1건당 이미지 1개 + 결과 JSON 1개(같은 base name)를 processed/ 아래에 남긴다.
    만들어진 파일은 지우지도, 고치지도 않는다.
    """

    def __init__(self, uploads_dir: Path, processed_dir: Path):
        self.uploads_dir = Path(uploads_dir)
        self.processed_dir = Path(processed_dir)

    @staticmethod
    def new_base_name() -> str:
        return secrets.token_hex(8)

    def stage(self, raw: bytes, suffix: str) -> Path:
        try:
            self.uploads_dir.mkdir(parents=True, exist_ok=True)
            dst = self.uploads_dir / f"{self.new_base_name()}{suffix}"
            dst.write_bytes(raw)
        except OSError as e:
            raise PersistenceFailed(f"staging failed: {e}")
        return dst

    def discard(self, path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("could not remove %s: %s", path, e)

    def promote(self, staged: Path) -> Path:
        try:
            self.processed_dir.mkdir(parents=True, exist_ok=True)
            dst = self.processed_dir / staged.name
            shutil.move(str(staged), str(dst))
        except OSError as e:
            raise PersistenceFailed(f"failed to move processed image: {e}")
        return dst

    def write_document(self, base_name: str, result: AnalysisResult) -> str:
        name = f"{base_name}{DOCUMENT_SUFFIX}"
        try:
            self.processed_dir.mkdir(parents=True, exist_ok=True)
            with (self.processed_dir / name).open("w", encoding="utf-8") as f:
                json.dump(result.model_dump(), f, indent=2, ensure_ascii=False)
                f.write("\n")
        except OSError as e:
            raise PersistenceFailed(f"failed to save JSON response: {e}")
        return name
