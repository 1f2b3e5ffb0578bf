import pandas as pd
import streamlit as st

from state import init_state
from ui import app_shell, result_card, show_json
from api import get_entry, list_entries
from results import display_fields

st.set_page_config(page_title="기록", page_icon="🗂️", layout="centered")
init_state()
app_shell("🗂️ 분석 기록", active="history", show_tabs=True)

with st.spinner("기록 불러오는 중..."):
    entries = list_entries()

if isinstance(entries, dict) and "error" in entries:
    st.error("기록을 불러오지 못했습니다.")
    st.stop()

if not entries:
    st.info("아직 분석한 음식이 없습니다.")
    st.stop()

rows = [
    {
        "#": i,
        "음식": e.get("item_name"),
        "kcal": e.get("calories"),
        "점수": e.get("score"),
        "당(g)": e.get("sugar"),
        "단백질(g)": e.get("protein"),
        "지방(g)": e.get("fat"),
    }
    for i, e in enumerate(entries)
]
st.dataframe(pd.DataFrame(rows).set_index("#"), use_container_width=True)

st.markdown("#### 🔎 한 건 자세히")
idx = st.number_input("번호", min_value=0, max_value=len(entries) - 1, value=len(entries) - 1, step=1)
entry = get_entry(int(idx))
if "error" in entry:
    st.warning("해당 번호의 기록이 없습니다.")
else:
    result_card(display_fields(entry))
    show_json(entry)
