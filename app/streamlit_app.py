"""Concertina Fingering — Streamlit UI.

Minimal interactive application:
    1. Paste an ABC tune (or upload a .abc file)
    2. Run the fingering pipeline
    3. View the annotated tune and a per-note table
    4. Download the annotated tune and/or the table as JSON

Constraints:
    - No score rendering
    - No audio playback
    - Simple, readable code
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Ensure the project root is importable
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from src.concertina_engine.annotate import (  # noqa: E402
    annotate_tune,
    annotation_records,
    annotations_to_json_bytes,
)
from src.concertina_engine.button_catalog import default_catalog  # noqa: E402

_EXAMPLE_TUNE = """X:1
T:Example
M:4/4
L:1/8
K:G
GABc dedB|dedB dedB|c2ec B2dB|c2A2 A2BA|
"""

# ── Page config ───────────────────────────────────────────────
st.set_page_config(
    page_title="Concertina Fingering",
    page_icon="🪗",
    layout="wide",
)

st.title("🪗 Concertina Fingering")
st.markdown(
    f"Paste an ABC tune and get a suggested button for every note on the "
    f"**{default_catalog().name}** layout."
)
st.divider()

# ── Input ─────────────────────────────────────────────────────
uploaded_file = st.file_uploader("Choose an ABC file", type=["abc", "txt"])
initial_text = uploaded_file.getvalue().decode("utf-8") if uploaded_file else _EXAMPLE_TUNE
abc_text: str = st.text_area("ABC tune", value=initial_text, height=240)

if st.button("▶  Suggest Fingering", type="primary"):
    result = annotate_tune(abc_text)

    if not result.ok:
        st.error(result.to_output())
    else:
        # ── Summary stats ─────────────────────────────────────
        st.subheader("Summary")
        records = annotation_records(result)
        c1, c2, c3 = st.columns(3)
        c1.metric("Notes", len(records))
        c2.metric("Buttons Used", len({r["button"] for r in records}))
        c3.metric("Total Cost", f"{result.assignment.total_cost:g}")

        # ── Annotated tune ────────────────────────────────────
        st.subheader("Annotated Tune")
        st.code(result.text, language=None)

        # ── Annotation table ──────────────────────────────────
        st.subheader("Annotation Table")
        st.dataframe(records, use_container_width=True, height=400)

        # ── Downloads ─────────────────────────────────────────
        st.subheader("Downloads")
        st.download_button(
            label="⬇  Download annotated tune",
            data=(result.text or "").encode("utf-8"),
            file_name="fingered.abc",
            mime="text/plain",
        )
        st.download_button(
            label="⬇  Download annotations.json",
            data=annotations_to_json_bytes(result),
            file_name="annotations.json",
            mime="application/json",
        )
