from typing import Any, Callable, Dict, MutableMapping, Optional

from api import GENERIC_FAILURE, analyze_image, fetch_result
from results import display_fields

State = MutableMapping[str, Any]

# 사용자에게 그대로 보여줘도 되는 서버 메시지만 번역해서 노출
FRIENDLY_ERRORS: Dict[str, str] = {
    "Not recognized as food": "음식으로 인식되지 않았습니다. 음식 사진을 올려 주세요.",
    "No image provided": "이미지를 선택하세요.",
}


def camera_widget_key(state: State) -> str:
    facing = "front" if state["prefer_front"] else "rear"
    return f"camera-{facing}-{state['camera_key']}"


def start_capture(state: State, prefer_front: bool) -> str:
    """
    카메라 위젯을 (다시) 켠다. 방향이 바뀌면 key 를 새로 발급해
    이전 위젯의 스트림을 먼저 내려놓게 한다(동시에 하나만 활성).
    """
    if state["camera_active"] and state["prefer_front"] == prefer_front:
        return camera_widget_key(state)
    if state["prefer_front"] != prefer_front:
        state["camera_key"] += 1
    state["prefer_front"] = prefer_front
    state["camera_active"] = True
    return camera_widget_key(state)


def _friendly(error: Any) -> str:
    return FRIENDLY_ERRORS.get(error, GENERIC_FAILURE) if isinstance(error, str) else GENERIC_FAILURE


def fetch_and_render(
    state: State,
    json_file_name: str,
    fetch: Callable[[str], Dict[str, Any]] = fetch_result,
) -> bool:
    doc = fetch(json_file_name)
    if not isinstance(doc, dict) or "error" in doc:
        state["last_error"] = GENERIC_FAILURE
        return False
    state["result"] = display_fields(doc)
    state["last_handle"] = json_file_name
    state["last_error"] = None
    return True


def submit_image(
    state: State,
    file_bytes: Optional[bytes],
    filename: str,
    mime_type: str = "image/jpeg",
    analyze: Callable[..., Dict[str, Any]] = analyze_image,
    fetch: Callable[[str], Dict[str, Any]] = fetch_result,
) -> bool:
    """
    1단계: /analyze 로 업로드해 handle(jsonFileName)을 받고
    2단계: handle 로 결과 문서를 받아 화면 상태에 반영한다.
    실패하면 기존 결과는 그대로 두고 last_error 만 채운다.
    """
    if not file_bytes:
        state["last_error"] = FRIENDLY_ERRORS["No image provided"]
        return False

    state["preview"] = (file_bytes, filename)
    state["camera_active"] = False

    resp = analyze(file_bytes, filename, mime_type)
    handle = resp.get("jsonFileName") if isinstance(resp, dict) else None
    if not handle:
        state["last_error"] = _friendly((resp or {}).get("error") if isinstance(resp, dict) else None)
        return False
    return fetch_and_render(state, handle, fetch=fetch)


def reset(state: State) -> None:
    """화면 결과만 비운다. 서버에 저장된 파일은 건드리지 않는다."""
    state["result"] = None
    state["last_error"] = None
    state["preview"] = None
    state["uploader_key"] += 1
    state["camera_active"] = True
