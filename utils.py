# utils.py

import plotly.graph_objects as go

from policies import ClockState, FIFOState, LRUState

# Frame cell colors by state
COLORS = {
    "empty": "#334155",
    "occupied": "#3b82f6",
    "hit": "#10b981",
    "fault": "#ef4444",
}


def get_color(state):
    """Return a color for a frame cell ('empty', 'occupied', 'hit', 'fault')."""
    return COLORS.get(state, COLORS["empty"])


def frames_figure(record, frame_count):
    """Bar per frame slot for one step; the referenced page is highlighted."""
    x, y, text, colors = [], [], [], []
    for slot in range(frame_count):
        page = record.frames[slot] if record is not None and slot < len(record.frames) else None
        if page is None:
            label = f"F{slot}: Free"
            state = "empty"
        else:
            label = f"F{slot}: P{page}"
            state = "occupied"
            if slot == record.frame_index:
                state = "hit" if record.is_hit else "fault"
        x.append(slot)
        y.append(1)
        text.append(label)
        colors.append(get_color(state))

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=x,
        y=y,
        text=text,
        marker_color=colors,
        hovertext=text,
        hoverinfo="text",
    ))
    fig.update_layout(
        height=180,
        showlegend=False,
        yaxis=dict(showticklabels=False),
        xaxis=dict(tickmode="array", tickvals=x, ticktext=[f"Frame {i}" for i in x]),
    )
    return fig


def timeline_figure(history, frame_count):
    """
    Grid of frame contents over time: one column per step, one row per
    frame slot. The cell loaded or hit on a step is colored by outcome.
    """
    # z: 0 empty, 1 occupied, 2 hit, 3 fault
    z = [[0] * len(history) for _ in range(frame_count)]
    text = [[""] * len(history) for _ in range(frame_count)]
    for col, record in enumerate(history):
        for slot, page in enumerate(record.frames):
            z[slot][col] = 1
            text[slot][col] = str(page)
        z[record.frame_index][col] = 2 if record.is_hit else 3

    columns = [f"{r.step}:{r.page}" for r in history]
    scale = [
        [0.0, get_color("empty")], [0.25, get_color("empty")],
        [0.25, get_color("occupied")], [0.5, get_color("occupied")],
        [0.5, get_color("hit")], [0.75, get_color("hit")],
        [0.75, get_color("fault")], [1.0, get_color("fault")],
    ]
    fig = go.Figure(go.Heatmap(
        z=z,
        x=columns,
        y=[f"Frame {i}" for i in range(frame_count)],
        text=text,
        texttemplate="%{text}",
        colorscale=scale,
        zmin=0,
        zmax=3,
        showscale=False,
        xgap=2,
        ygap=2,
    ))
    fig.update_layout(
        height=80 + 40 * frame_count,
        yaxis=dict(autorange="reversed"),
        xaxis=dict(title="step:page", side="top"),
    )
    return fig


def hits_faults_figure(stats):
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=["Hits", "Faults"],
        y=[stats.hit_count, stats.fault_count],
        marker_color=[get_color("hit"), get_color("fault")],
    ))
    fig.update_layout(height=300, title="Hits vs Faults")
    return fig


def comparison_figure(results):
    """Faults per algorithm, from engine.compare_algorithms()."""
    names = [name.upper() for name in results]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=names,
        y=[s.fault_count for s in results.values()],
        name="Faults",
        marker_color=get_color("fault"),
    ))
    fig.add_trace(go.Bar(
        x=names,
        y=[s.hit_count for s in results.values()],
        name="Hits",
        marker_color=get_color("hit"),
    ))
    fig.update_layout(height=300, barmode="group", title="Algorithm Comparison")
    return fig


def fault_curve_figure(curve, algorithm):
    """Faults vs number of frames (Belady's anomaly shows as a rise)."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[frames for frames, _ in curve],
        y=[faults for _, faults in curve],
        mode="lines+markers",
        name=algorithm.upper(),
    ))
    fig.update_layout(
        height=300,
        title=f"Page Faults vs Frames ({algorithm.upper()})",
        xaxis=dict(title="Frames", dtick=1),
        yaxis=dict(title="Page Faults"),
    )
    return fig


def policy_state_rows(state):
    """Flatten a policy snapshot into table rows for display."""
    if isinstance(state, FIFOState):
        return [{"position": i, "page": p} for i, p in enumerate(state.queue)]
    if isinstance(state, LRUState):
        return [{"rank (LRU first)": i, "page": p} for i, p in enumerate(state.recency)]
    if isinstance(state, ClockState):
        return [{"page": p, "reference bit": int(flag)} for p, flag in state.reference_flags.items()]
    return [
        {"page": p, "positions": ", ".join(map(str, positions))}
        for p, positions in state.future_references.items()
    ]
