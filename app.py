"""
Page Replacement Visualizer — FIFO, LRU, Optimal & Clock

Interactive front end for the page replacement simulation engine. The
engine (engine.py) computes the complete step history in one run; this
app only replays that history:
    - Frame contents at any step, with the hit or faulted page highlighted
    - The replacement policy's bookkeeping at that step
    - Statistics, a frame timeline and an event log
    - Comparison of all four algorithms and a faults-vs-frames curve

Run with:  streamlit run app.py
"""

# =============================================================================
# IMPORTS
# =============================================================================

import streamlit as st                       # Web application framework

from engine import (                         # Simulation engine
    ALGORITHMS,
    DEFAULT_FRAME_COUNT,
    DEFAULT_REFERENCE_STRING,
    MAX_FRAME_COUNT,
    PageReplacementSimulator,
    SimulationError,
    compare_algorithms,
    fault_curve,
)
from utils import (                          # Plotly figure builders
    comparison_figure,
    fault_curve_figure,
    frames_figure,
    hits_faults_figure,
    policy_state_rows,
    timeline_figure,
)


# =============================================================================
# STREAMLIT UI - Web Application Interface
# =============================================================================

st.set_page_config(page_title="Page Replacement Visualizer", layout="wide")

page = st.sidebar.radio("Choose View", ["Simulator", "Concepts"])

st.title("Page Replacement Visualizer — FIFO, LRU, Optimal & Clock")

# =============================================================================
# CONCEPTS PAGE - Educational Content
# =============================================================================

if page == "Concepts":
    st.header("Page Replacement Concepts")
    st.markdown(
        """
        ## 📘 Key Concepts

        ### **Page Fault / Page Hit**
        - A **hit** means the referenced page is already in a frame.
        - A **fault** means it is not, so it must be loaded. When every frame
          is occupied, a resident page (the **victim**) is evicted first.

        ### **FIFO (First In First Out)**
        - Evict the page that was loaded earliest. Hits do not change the order.

        ### **LRU (Least Recently Used)**
        - Evict the page that has gone longest without being referenced.

        ### **Optimal (Belady's algorithm)**
        - Evict the page whose next reference is furthest in the future, or
          that is never referenced again. Needs the whole reference string in
          advance, so it is a lower bound rather than a practical policy.
        - Ties go to the first such page in frame order.

        ### **Clock (Second Chance)**
        - Each page has a **reference bit**, set whenever it is accessed.
        - A hand sweeps the frames: a set bit is cleared and the page is
          skipped; the first page with a clear bit is evicted.

        ### **Belady's Anomaly**
        - With FIFO, adding frames can *increase* faults.
          Try `1,2,3,4,1,2,5,1,2,3,4,5`: 9 faults with 3 frames, 10 with 4.
        """
    )
    st.stop()

# =============================================================================
# SIMULATOR PAGE - Main Interactive Interface
# =============================================================================

# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Simulation Settings")

reference_input = st.sidebar.text_area(
    "Reference string (comma or space separated page numbers)",
    value=DEFAULT_REFERENCE_STRING,
)

frame_count = st.sidebar.number_input(
    "Number of frames",
    min_value=1,
    max_value=MAX_FRAME_COUNT,
    value=DEFAULT_FRAME_COUNT,
    step=1,
)

algorithm = st.sidebar.selectbox(
    "Replacement Algorithm",
    options=list(ALGORITHMS),
    format_func=str.upper,
)

# -----------------------------------------------------------------------------
# SESSION STATE - Finished simulation persists across reruns
# -----------------------------------------------------------------------------

# Comparison runs happen once per "Run Simulation", not on every rerun
if st.sidebar.button("Run Simulation", key="run"):
    try:
        simulator = PageReplacementSimulator(reference_input, int(frame_count), algorithm)
        simulator.simulate()
        st.session_state.simulator = simulator
        st.session_state.comparison = compare_algorithms(
            simulator.reference_string, simulator.frame_count
        )
        st.session_state.fault_curve = fault_curve(
            simulator.reference_string, simulator.algorithm, MAX_FRAME_COUNT
        )
        st.session_state.step = 0
    except SimulationError as e:
        st.sidebar.error(str(e))

if st.sidebar.button("Reset", key="reset"):
    for name in ("simulator", "comparison", "fault_curve", "step"):
        st.session_state.pop(name, None)
    st.sidebar.success("Simulation reset")

st.sidebar.markdown("---")

simulator = st.session_state.get("simulator")

if simulator is None:
    st.info("Enter a reference string, choose frames and an algorithm, then click **Run Simulation**.")
    st.stop()

history = simulator.history
stats = simulator.get_statistics()

st.caption(
    f"{simulator.algorithm.upper()} · {simulator.frame_count} frames · "
    f"{stats.total_references} references"
)

if not history:
    st.warning("The reference string is empty — nothing to replay.")
    st.stop()

# -----------------------------------------------------------------------------
# PLAYBACK - Step through the recorded history
# -----------------------------------------------------------------------------

# Slider needs min < max; "Run Simulation" resets its value to 0
if len(history) > 1:
    step = st.slider("Step", min_value=0, max_value=len(history) - 1, key="step")
else:
    step = 0
record = history[step]

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([1, 2])

with col1:
    st.subheader("Current Step")
    outcome = "HIT" if record.is_hit else "FAULT"
    message = f"Step {record.step}: page {record.page} -> {outcome} (frame {record.frame_index})"
    if record.is_hit:
        st.success(message)
    else:
        st.error(message)
    if record.evicted is not None:
        st.write(f"Evicted page {record.evicted}")

    st.subheader("Policy State")
    rows = policy_state_rows(record.policy_state)
    if rows:
        st.table(rows)
    else:
        st.write("Empty")
    if hasattr(record.policy_state, "pointer"):
        st.write(f"Clock hand at frame {record.policy_state.pointer}")

    st.subheader("Event Log")
    for ev in simulator.event_log[-20:][::-1]:
        st.write(ev)

with col2:
    st.subheader("Physical Frames")
    st.plotly_chart(frames_figure(record, simulator.frame_count), use_container_width=True)

    st.subheader("Frame Timeline")
    st.plotly_chart(timeline_figure(history[: step + 1], simulator.frame_count), use_container_width=True)

    st.subheader("Statistics")
    m1, m2, m3 = st.columns(3)
    m1.metric("Page References", stats.total_references)
    m2.metric("Page Faults", stats.fault_count)
    m3.metric("Hit Ratio", f"{stats.hit_ratio_percent:.2f}%")
    st.plotly_chart(hits_faults_figure(stats), use_container_width=True)

# -----------------------------------------------------------------------------
# COMPARISONS - Same input across algorithms and frame counts
# -----------------------------------------------------------------------------

st.markdown("---")
col3, col4 = st.columns(2)

with col3:
    st.plotly_chart(comparison_figure(st.session_state.comparison), use_container_width=True)

with col4:
    st.plotly_chart(
        fault_curve_figure(st.session_state.fault_curve, simulator.algorithm),
        use_container_width=True,
    )

with st.expander("Execution Trace"):
    st.code(simulator.get_execution_trace(), language="text")

st.markdown("---")
st.markdown(
    "**Instructor examples**:\n"
    "1) Belady's anomaly: FIFO with `1,2,3,4,1,2,5,1,2,3,4,5`, compare 3 and 4 frames.\n"
    "2) Textbook string: `7,0,1,2,0,3,0,4,2,3,0,3,2,1,2,0,1,7,0,1` with 3 frames — "
    "FIFO 15, LRU 12, Optimal 9 faults."
)
