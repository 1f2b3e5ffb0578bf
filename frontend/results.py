import math
from typing import Any, Dict

# 화면 초기값 / reset 후 값
PLACEHOLDERS: Dict[str, str] = {
    "item_name": "SAMPLE TEXT",
    "calories": "SAMPLE TEXT",
    "score": "?/5",
    "description": "No description available.",
    "sugar": "No sugar content available.",
    "protein": "No protein content available.",
    "fat": "No fat content available.",
    "sustainable_alternatives": "No alternatives available.",
}

_NA = "N/A"


def _txt(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return ""


def _grams(value: Any) -> str:
    t = _txt(value)
    return f"{t} grams" if t and t != _NA else _NA


def display_fields(result: Any) -> Dict[str, str]:
    """
    결과 문서(dict) → 화면에 찍을 문자열.
    {"content": {...}} 래퍼도 받는다. 빈 값은 서버와 같은 기본값으로 채우므로 빈 문자열은 나오지 않는다.
    """
    data = result if isinstance(result, dict) else {}
    if isinstance(data.get("content"), dict):
        data = data["content"]

    calories = _txt(data.get("calories"))
    score = _txt(data.get("score"))
    alts = data.get("sustainable_alternatives")
    alts = [_txt(a) for a in alts] if isinstance(alts, list) else []
    alts = [a for a in alts if a]

    return {
        "item_name": _txt(data.get("item_name")) or "Unknown",
        "calories": f"{calories} calories" if calories and calories != _NA else _NA,
        "score": f"{score}/5" if score and score != _NA else PLACEHOLDERS["score"],
        "description": _txt(data.get("description")) or "No description available.",
        "sugar": _grams(data.get("sugar")),
        "protein": _grams(data.get("protein")),
        "fat": _grams(data.get("fat")),
        "sustainable_alternatives": ", ".join(alts) if alts else PLACEHOLDERS["sustainable_alternatives"],
    }
