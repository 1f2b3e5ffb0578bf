import streamlit as st

from state import init_state
from ui import app_shell, result_card, show_preview
from capture import camera_widget_key, reset, start_capture, submit_image

st.set_page_config(page_title="Menu Companion", page_icon="🥗", layout="centered")
init_state()

app_shell("Menu Companion 🥗", active="home", show_tabs=True)

st.markdown(
    """
    <div style="text-align:center; margin-top:-6px;">
        <p style="color:#6b7280; font-size:14px; margin-bottom:12px;">
            음식을 찍거나 사진을 올리면 영양 정보와 지속가능성 점수를 알려드려요
        </p>
    </div>
    """,
    unsafe_allow_html=True,
)

# ----------------- 카메라 / 파일 선택 -----------------
c1, c2 = st.columns(2)
with c1:
    if st.button("🔄 카메라 전환", use_container_width=True):
        start_capture(st.session_state, not st.session_state["prefer_front"])
with c2:
    if st.button("♻️ 초기화", use_container_width=True):
        reset(st.session_state)

shot = None
if st.session_state["camera_active"]:
    facing = "전면" if st.session_state["prefer_front"] else "후면"
    shot = st.camera_input(f"📷 {facing} 카메라로 촬영", key=camera_widget_key(st.session_state))
elif st.session_state["preview"]:
    show_preview(*st.session_state["preview"])

file = st.file_uploader(
    "또는 이미지 업로드",
    type=["jpg", "jpeg", "png", "webp", "gif", "bmp"],
    key=f"uploader-{st.session_state['uploader_key']}",
)

picked = shot or file
if picked is not None and st.button("분석하기", type="primary", use_container_width=True):
    with st.spinner("분석 중..."):
        submit_image(
            st.session_state,
            picked.getvalue(),
            picked.name or "capture.jpg",
            picked.type or "image/jpeg",
        )
    st.rerun()

# ----------------- 결과 -----------------
if st.session_state["last_error"]:
    st.error(st.session_state["last_error"])

result_card(st.session_state["result"])
