# app.py
# 도서 등록 신청: spreadsheet-like entry grid that appends to a Google Sheet,
# plus an admin view that reads the sheet back and exports it to Excel.
# Requires: streamlit, pandas, gspread, google-auth, requests, openpyxl
# Also add a service account to .streamlit/secrets.toml (see bookreg/config.py).

import logging

import pandas as pd
import streamlit as st

from bookreg.busy import request_action, run_pending
from bookreg.config import SECRETS_EXAMPLE, SheetConfig
from bookreg.errors import ConfigError, EmptySubmissionError, RegistrationError
from bookreg.export import XLSX_MIME, export_filename, to_dataframe, to_xlsx_bytes
from bookreg.grid import GridSettings, can_delete, seed_grid
from bookreg.models import DATE_FIELDS, FIELDS, LABELS
from bookreg.reducer import AddRow, DeleteRow, Paste, SetCell, reduce
from bookreg.services import RegistrationService
from bookreg.utils import apply_date_mask, display_value

# ==========================================
# App config
# ==========================================
st.set_page_config(page_title="도서 등록 신청", page_icon="📚", layout="wide")

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("bookreg.app")

SETTINGS = GridSettings()


@st.cache_resource
def get_config() -> SheetConfig:
    return SheetConfig.from_secrets(st.secrets)


try:
    CONFIG = get_config()
except (ConfigError, FileNotFoundError) as e:
    st.error(str(e))
    st.code(SECRETS_EXAMPLE, language="toml")
    st.stop()

SERVICE = RegistrationService(CONFIG, SETTINGS)

st.session_state.setdefault("grid", seed_grid(SETTINGS.seed_rows))
st.session_state.setdefault("editor_version", 0)
st.session_state.setdefault("busy", False)
st.session_state.setdefault("pending", None)
st.session_state.setdefault("submissions", [])
st.session_state.setdefault("flash", None)


def dispatch(action):
    st.session_state.grid = reduce(st.session_state.grid, action, SETTINGS)
    # new editor key, otherwise data_editor replays its stale edits on top of the new grid
    st.session_state.editor_version += 1


def flash(level: str, message: str):
    st.session_state.flash = (level, message)


def show_flash():
    if st.session_state.flash:
        level, message = st.session_state.flash
        getattr(st, level)(message)
        st.session_state.flash = None


def grid_frame(grid) -> pd.DataFrame:
    records = []
    for pos, row in enumerate(grid.rows):
        rec = {"#": pos + 1}
        for f in FIELDS:
            rec[LABELS[f]] = display_value(f, getattr(row, f))
        records.append(rec)
    return pd.DataFrame(records, columns=["#"] + [LABELS[f] for f in FIELDS])


def edits_from(grid, edited: pd.DataFrame) -> list:
    """Compare the editor output against the grid and turn changes into SetCell actions."""
    actions = []
    for pos, row in enumerate(grid.rows):
        if pos >= len(edited):
            break
        for f in FIELDS:
            new = edited.iloc[pos][LABELS[f]]
            new = "" if new is None or pd.isna(new) else str(new)
            old = getattr(row, f)
            if new == display_value(f, old):
                continue
            if f in DATE_FIELDS:
                new = apply_date_mask(old, new)
            actions.append(SetCell(row.id, f, new))
    return actions


# ==========================================
# Network actions (run one script pass after the click, with controls disabled)
# ==========================================

def submit_grid():
    try:
        with st.spinner("저장 중..."):
            count, st.session_state.grid = SERVICE.submit(st.session_state.grid)
    except EmptySubmissionError as e:
        flash("warning", e.user_message)
    except RegistrationError as e:
        logger.error("Submission failed: %s", e)
        flash("error", f"오류: {e.user_message}")
    else:
        st.session_state.editor_version += 1
        flash("success", f"{count}건의 도서가 저장되었습니다!")


def load_submissions():
    try:
        with st.spinner("불러오는 중..."):
            st.session_state.submissions = SERVICE.load()
    except RegistrationError as e:
        logger.error("Load failed: %s", e)
        flash("error", f"오류: {e.user_message}")


# ==========================================
# Registration view
# ==========================================

def registration_view():
    st.title("📚 도서 등록 신청")
    st.caption("Google Sheets 자동 저장")
    show_flash()

    grid = st.session_state.grid
    busy = st.session_state.busy

    edited = st.data_editor(
        grid_frame(grid),
        key=f"grid_{st.session_state.editor_version}",
        width="stretch",
        hide_index=True,
        num_rows="fixed",
        disabled=True if busy else ["#"],
        column_config={
            "#": st.column_config.NumberColumn("#", width="small"),
            LABELS["price"]: st.column_config.TextColumn(LABELS["price"], help="숫자만 입력"),
            **{LABELS[f]: st.column_config.TextColumn(LABELS[f], help="YYYYMMDD") for f in DATE_FIELDS},
        },
    )

    actions = [] if busy else edits_from(grid, edited)
    if actions:
        for action in actions:
            dispatch(action)
        st.rerun()

    # -----------------------------
    # Bulk paste
    # -----------------------------
    with st.expander("📋 Excel 붙여넣기", expanded=False):
        st.info("💡 Excel 데이터를 붙여넣으면 자동으로 여러 행에 입력됩니다.")
        ids = [r.id for r in grid.rows]
        c1, c2 = st.columns(2)
        with c1:
            anchor_pos = st.selectbox("시작 행", options=range(len(ids)), format_func=lambda p: f"{p + 1}")
        with c2:
            anchor_field = st.selectbox("시작 열", options=FIELDS, format_func=lambda f: LABELS[f])
        text = st.text_area("붙여넣을 내용", key=f"paste_{st.session_state.editor_version}", height=160)
        if st.button("붙여넣기", disabled=busy or not text.strip()):
            dispatch(Paste(ids[anchor_pos], anchor_field, text))
            st.rerun()

    # -----------------------------
    # Row controls
    # -----------------------------
    left, mid, right = st.columns([1, 2, 1])
    with left:
        if st.button("➕ 행 추가", disabled=busy):
            dispatch(AddRow())
            st.rerun()
    with mid:
        positions = grid.positions()
        deletable = [r for r in grid.rows if can_delete(grid, r, SETTINGS.delete_policy, SETTINGS.seed_rows)]
        if deletable:
            d1, d2 = st.columns([2, 1])
            with d1:
                target = st.selectbox(
                    "삭제할 행",
                    options=[r.id for r in deletable],
                    format_func=lambda rid: f"{positions[rid] + 1}행",
                    label_visibility="collapsed",
                )
            with d2:
                if st.button("🗑️ 행 삭제", disabled=busy):
                    dispatch(DeleteRow(target))
                    st.rerun()
    with right:
        st.button(
            "💾 신청하기",
            type="primary",
            disabled=busy,
            on_click=request_action,
            args=(st.session_state, "submit"),
        )

    if run_pending(st.session_state, {"submit": submit_grid}):
        st.rerun()


# ==========================================
# Admin view
# ==========================================

def admin_view():
    st.title("🗂️ 신청 내역 관리")
    show_flash()

    st.button(
        "🔄 새로고침",
        disabled=st.session_state.busy,
        on_click=request_action,
        args=(st.session_state, "refresh"),
    )

    submissions = st.session_state.submissions
    st.caption(f"총 {len(submissions)}건")
    st.dataframe(to_dataframe(submissions), width="stretch", hide_index=True)

    st.download_button(
        "⬇️ Excel 다운로드",
        data=to_xlsx_bytes(submissions),
        file_name=export_filename(),
        mime=XLSX_MIME,
        disabled=st.session_state.busy or not submissions,
    )

    if run_pending(st.session_state, {"refresh": load_submissions}):
        st.rerun()


view = st.sidebar.radio("화면", options=["등록", "관리자"], index=0)
if view == "등록":
    registration_view()
else:
    admin_view()
