"""
Picture Editor — Streamlit page.

Run with:
    streamlit run app.py

Layout:
  - left column   image upload, filters, edge detector, revert, download
  - right column  current image (and the original for comparison)
"""

from __future__ import annotations

import logging
from pathlib import Path

import streamlit as st

from picture_editor import image_io
from picture_editor.config import configure_logging, load_settings
from picture_editor.edge.detector import EdgeDetector
from picture_editor.filters.pixel import FILTERS, PixelFilters
from picture_editor.image_io import SUPPORTED_FORMATS
from picture_editor.session import EditingSession

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("picture_editor.app")

# ── Page config ───────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Picture Editor",
    page_icon="🖼️",
    layout="wide",
    initial_sidebar_state="collapsed",
)

st.title("Picture Editor")
st.caption("Filters · two-axis edge detection · revert to original")

# Keep large images from stretching the page
st.markdown("""
    <style>
        [data-testid="stImage"] img {
            max-height: 500px !important;
            width: auto !important;
            object-fit: contain;
        }
    </style>
""", unsafe_allow_html=True)


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

@st.cache_resource
def _detector() -> EdgeDetector:
    return EdgeDetector()


def _session() -> EditingSession | None:
    return st.session_state.get("session")


def _load_upload(uploaded) -> None:
    """Decode an UploadedFile and start a new editing session with it."""
    uploaded.seek(0)
    pixels = image_io.load_bytes(uploaded.read())
    st.session_state["session"] = EditingSession(
        pixels,
        detector=_detector(),
        filters=PixelFilters(settings.mosaic_block_size),
    )
    st.session_state["upload_id"] = uploaded.file_id
    logger.info("Loaded upload %s", uploaded.name)


def _run(action, *args, **kwargs) -> bool:
    """Run a session action and show errors instead of crashing the page."""
    try:
        action(*args, **kwargs)
    except (KeyError, ValueError) as err:
        st.error(f"An error occurred: {err}")
        return False
    return True


# ─────────────────────────────────────────────────────────────────────────────
# Page
# ─────────────────────────────────────────────────────────────────────────────

col_left, col_right = st.columns([1, 2], gap="large")

with col_left:
    uploaded = st.file_uploader("Image", type=["png", "jpg", "jpeg", "bmp"], key="image_upload")
    if uploaded is not None and st.session_state.get("upload_id") != uploaded.file_id:
        _run(_load_upload, uploaded)

    session = _session()

    st.markdown("#### Filters")
    filter_cols = st.columns(3)
    for col, name in zip(filter_cols, FILTERS):
        if col.button(name, use_container_width=True, disabled=session is None):
            _run(session.apply_filter, name)

    st.markdown("#### Edge Detection")
    kernel_names = _detector().list_names()
    kernel_x = st.selectbox("X axis kernel", kernel_names, key="kernel_x")
    same_xy = st.checkbox("Same kernel for both axes", value=False, key="same_xy")
    kernel_y = st.selectbox("Y axis kernel", kernel_names, key="kernel_y", disabled=same_xy)

    edges_applied = session is not None and session.edges_applied
    if st.button("Apply Edge Detector", type="primary", use_container_width=True,
                 disabled=session is None or edges_applied):
        if _run(session.apply_edge_detection, kernel_x, kernel_y, same_for_both_axes=same_xy):
            st.rerun()
    if edges_applied:
        st.info("Edge detection has already been applied to this image. Revert to apply it again.")

    st.write("")  # Spacing
    if st.button("↺ Revert to Original", use_container_width=True, disabled=session is None):
        session.revert()
        st.rerun()

    st.markdown("#### Save")
    fmt = st.selectbox("Format", SUPPORTED_FORMATS, index=SUPPORTED_FORMATS.index(settings.default_format))
    if session is not None:
        stem = Path(uploaded.name).stem if uploaded is not None else "picture"
        suffix = {"PNG": ".png", "JPEG": ".jpg", "BMP": ".bmp"}[fmt]
        st.download_button(
            "💾 Download",
            data=image_io.encode(session.current, fmt),
            file_name=f"{stem}_edited{suffix}",
            mime=f"image/{fmt.lower()}",
            use_container_width=True,
        )

with col_right:
    session = _session()
    if session is None:
        st.info("Upload an image to start editing.")
    else:
        c1, c2 = st.columns(2)
        with c1:
            st.image(session.current, caption="Current", use_container_width=True)
        with c2:
            st.image(session.original, caption="Original", use_container_width=True)
