from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from backend.errors import AnalyzeError, ExternalCallFailed, NoImageProvided, NotFood, PersistenceFailed
from backend.services.artifacts import ArtifactStore
from backend.services.entry_log import EntryLog
from backend.utils.logger import get_logger
from backend.utils.normalizer import is_not_food, normalize_result, parse_model_answer
from backend.utils.vision_client import ANALYSIS_PROMPT, VisionClient

logger = get_logger(__name__)

EXT_BY_FMT = {"JPEG": ".jpg", "PNG": ".png", "WEBP": ".webp", "GIF": ".gif", "BMP": ".bmp"}


def _pil_format(raw: bytes) -> Optional[str]:
    try:
        with Image.open(io.BytesIO(raw)) as pil:
            return (pil.format or "").upper() or None
    except (UnidentifiedImageError, OSError):
        return None


def guess_mime(raw: bytes, content_type: Optional[str] = None) -> str:
    """Pillow 포맷 판별 → 업로드 content-type → image/jpeg 순으로 결정"""
    fmt = _pil_format(raw)
    if fmt and Image.MIME.get(fmt):
        return Image.MIME[fmt]
    if content_type and content_type.startswith("image/"):
        return content_type
    return "image/jpeg"


def upload_suffix(filename: Optional[str], raw: bytes) -> str:
    suffix = Path(filename or "").suffix.lower()
    if suffix:
        return suffix
    return EXT_BY_FMT.get(_pil_format(raw) or "", ".jpg")


def analyze_upload(
    raw: Optional[bytes],
    filename: Optional[str],
    content_type: Optional[str],
    client: VisionClient,
    artifacts: ArtifactStore,
    log: EntryLog,
) -> str:
    """
    업로드 이미지 1장 → 정규화된 AnalysisResult 1건 기록 → 결과 문서 파일명(handle) 반환.

    Received → Encoded → Queried → Parsed → Normalized → Persisted
    영속화는 정규화가 끝난 뒤에만 일어나고, 그 전에 실패하면 staging 파일을 지운다.
    """
    # 1) Received
    if not raw:
        raise NoImageProvided()
    logger.info("upload received: filename=%s size=%d", filename, len(raw))

    staged = artifacts.stage(raw, upload_suffix(filename, raw))
    try:
        # 2) Encoded + 3) Queried
        answer = client.describe(staged.read_bytes(), guess_mime(raw, content_type), ANALYSIS_PROMPT)

        if is_not_food(answer):
            logger.info("model says not food: %s", staged.name)
            raise NotFood()

        # 4) Parsed
        try:
            payload = parse_model_answer(answer)
        except AnalyzeError:
            logger.warning("unparsable model answer: %r", answer[:200])
            raise

        # 5) Normalized
        result = normalize_result(payload)
    except AnalyzeError:
        artifacts.discard(staged)
        raise
    except Exception:
        logger.exception("unexpected failure while analyzing %s", staged.name)
        artifacts.discard(staged)
        raise ExternalCallFailed("unexpected failure")

    # 6) Persisted
    image_path = artifacts.promote(staged)
    handle = artifacts.write_document(image_path.stem, result)
    try:
        position = log.append(result)
    except PersistenceFailed:
        # 로그에 없는 결과 문서는 남기지 않는다. 옮겨진 이미지는 그대로 둔다
        artifacts.discard(artifacts.processed_dir / handle)
        raise
    logger.info("saved %s + %s (entry #%d)", image_path.name, handle, position)

    # 7) Responded
    return handle
