from typing import Any, Dict, MutableMapping, Optional

import streamlit as st

DEFAULTS: Dict[str, Any] = {
    "prefer_front": True,     # 전면 카메라 선호
    "camera_key": 0,          # 바뀌면 이전 카메라 위젯(스트림)이 폐기된다
    "camera_active": True,
    "uploader_key": 0,
    "preview": None,          # (bytes, caption)
    "result": None,           # display_fields() 결과
    "last_handle": None,
    "last_error": None,
}


def init_state(state: Optional[MutableMapping[str, Any]] = None):
    state = st.session_state if state is None else state
    for k, v in DEFAULTS.items():
        if k not in state:
            state[k] = v
