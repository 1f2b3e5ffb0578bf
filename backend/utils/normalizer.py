import json
import math
import re
from typing import Any, Dict, List

from backend.errors import UnparsableModelOutput
from backend.schemas.analysis_schema import AnalysisResult

DEFAULTS: Dict[str, str] = {
    "item_name": "Unknown",
    "calories": "N/A",
    "score": "N/A",
    "description": "No description available.",
    "sugar": "N/A",
    "protein": "N/A",
    "fat": "N/A",
}

_FENCE_OPEN = re.compile(r"^\s*```[\w-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```\s*$")


def strip_code_fence(text: str) -> str:
    """```json ... ``` 로 감싼 모델 응답에서 펜스만 걷어낸다."""
    t = (text or "").strip()
    t = _FENCE_OPEN.sub("", t, count=1)
    t = _FENCE_CLOSE.sub("", t, count=1)
    return t.strip()


def is_not_food(text: str) -> bool:
    return "not food" in (text or "").lower()


def parse_model_answer(text: str) -> Dict[str, Any]:
    """
    펜스 제거 후 엄격한 JSON 파싱.
    {"content": {...}} 래퍼가 있으면 안쪽 객체를, 없으면 최상위 객체를 돌려준다.
    """
    cleaned = strip_code_fence(text)
    try:
        parsed = json.loads(cleaned)
    except (json.JSONDecodeError, TypeError) as e:
        raise UnparsableModelOutput(f"invalid JSON: {e}")

    if not isinstance(parsed, dict):
        raise UnparsableModelOutput(f"expected JSON object, got {type(parsed).__name__}")

    inner = parsed.get("content")
    if isinstance(inner, dict):
        return inner
    return parsed


def number_text(value: float) -> str:
    """숫자를 자릿수 손실 없이 문자열로. 95.0 → 95, 1234.567 → 1234.567, nan/inf → 빈 문자열"""
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value)


def _text(value: Any, default: str) -> str:
    # bool은 int의 하위 타입이라 먼저 거른다
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return number_text(value) or default
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _alternatives(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if not isinstance(value, list):
        return []
    out: List[str] = []
    for v in value:
        t = _text(v, "")
        if t:
            out.append(t)
    return out


def normalize_result(payload: Any) -> AnalysisResult:
    """부분적이거나 비어 있는 모델 출력 → 모든 필드가 채워진 AnalysisResult"""
    data = payload if isinstance(payload, dict) else {}
    fields = {k: _text(data.get(k), d) for k, d in DEFAULTS.items()}
    fields["sustainable_alternatives"] = _alternatives(data.get("sustainable_alternatives"))
    return AnalysisResult(**fields)
