import io
import logging
from typing import Dict, Optional

import streamlit as st
from PIL import Image, UnidentifiedImageError

from results import PLACEHOLDERS

logger = logging.getLogger(__name__)

PREVIEW_FAILED = "미리보기를 불러오지 못했습니다."

_MOBILE_CSS = """
<style>
.block-container{
  max-width: 420px !important;
  padding-bottom: 88px !important; /* 하단 탭바 공간 */
}

:root{
  --txt:#1f2937; --muted:#6b7280; --border:#e5e7eb; --panel:#f9fafb;
  --brand:#14532d; --brand2:#166534;
}
html, body, [data-baseweb="baseweb"]{
  font-family: -apple-system, BlinkMacSystemFont, "Noto Sans KR", system-ui, Segoe UI, Roboto, Arial, sans-serif;
  color: var(--txt);
}

.caption {font-size: 12px; color: var(--muted); margin: 0;}
.score {font-size: 28px; font-weight: 900; margin: 2px 0 6px;}

/* 상단 앱바 */
.appbar{
  position: sticky; top:0; z-index:50;
  background: var(--brand); color:#ecfdf5; border-bottom:1px solid #052e16;
  padding: 10px 14px; margin: -10px -10px 8px -10px; font-weight:800; font-size:18px; text-align:center;
}

/* 하단 탭바(고정) */
.mobile-tabbar{
  position: fixed; left:0; right:0; bottom:0; z-index:60;
  background: var(--brand); border-top:1px solid #052e16; padding:8px 8px 10px;
}
.mobile-tabbar__inner{ max-width: 420px; margin:0 auto; }
.tab-btn{
  border-radius:12px; font-weight:800; font-size:14px; padding:0; overflow:hidden;
  background:#052e16; color:#bbf7d0; border: none;
}
.tab-btn.active{ background: var(--brand2); color:#ecfdf5; }

#MainMenu, header, footer {visibility:hidden;}
[data-testid="stMetricValue"]{font-size:16px}
</style>
"""


def app_shell(title: str, active: str = "home", show_tabs: bool = True):
    """
    active: 'home' | 'history'
    - 각 페이지 파일 상단에서 st.set_page_config(...) 먼저 호출할 것
    """
    st.markdown(_MOBILE_CSS, unsafe_allow_html=True)
    st.markdown(f"<div class='appbar'>{title}</div>", unsafe_allow_html=True)

    if not show_tabs:
        return

    with st.container():
        st.markdown("<div class='mobile-tabbar'><div class='mobile-tabbar__inner'>", unsafe_allow_html=True)
        c1, c2 = st.columns(2)

        def _tab(label, page_path, is_active):
            btn_class = "tab-btn active" if is_active else "tab-btn"
            st.markdown(f"<div class='{btn_class}'>", unsafe_allow_html=True)
            st.page_link(page_path, label=label, use_container_width=True)
            st.markdown("</div>", unsafe_allow_html=True)

        with c1: _tab("📷 분석", "Home.py", active == "home")
        with c2: _tab("🗂️ 기록", "pages/1_History.py", active == "history")


def show_json(data):
    with st.expander("자세히 보기 (JSON)", expanded=False):
        st.json(data)


def result_card(fields: Optional[Dict[str, str]]):
    """display_fields() 결과를 카드로. None 이면 placeholder 로 채운다."""
    f = fields or PLACEHOLDERS
    with st.container(border=True):
        st.markdown(f"**{f['item_name']}**")
        st.markdown(f"<div class='score'>{f['score']}</div>", unsafe_allow_html=True)
        st.markdown("<p class='caption'>지속가능성 점수</p>", unsafe_allow_html=True)
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("칼로리", f["calories"])
        c2.metric("당류", f["sugar"])
        c3.metric("단백질", f["protein"])
        c4.metric("지방", f["fat"])
        st.write(f["description"])
        st.markdown(f"🌱 **대안**: {f['sustainable_alternatives']}")


def show_preview(raw: bytes, caption: str):
    """업로드/촬영한 사진 미리보기. 실패 사유는 로그로만 남긴다."""
    try:
        img = Image.open(io.BytesIO(raw))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        logger.warning("preview failed for %s: %s", caption, e)
        st.warning(PREVIEW_FAILED)
        return
    st.image(img, caption=caption, use_container_width=True)
