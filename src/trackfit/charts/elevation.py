"""
Elevation profile chart for an uploaded activity.

Consumes the LineString Feature from geo.linestring and renders its
`altitudes` channel as a PNG. The x-axis is the sample index; tick labels
show the timestamp at the same index when the timestamps channel has one
(the two channels are paired positionally, exactly as the browser chart
pairs them).
"""
import io
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from matplotlib.figure import Figure

# Number of x tick labels drawn along the profile
MAX_TIME_TICKS = 8


def make_elevation_chart(feature: Optional[Dict[str, Any]]) -> Optional[Tuple[bytes, str]]:
    """
    Render the elevation profile of a Feature.

    Returns (png_bytes, caption), or None when there is no altitude data.
    """
    if feature is None:
        return None
    props = feature.get("properties") or {}
    altitudes: List[float] = list(props.get("altitudes") or [])
    timestamps: List[datetime] = list(props.get("timestamps") or [])
    if not altitudes:
        return None

    elev = np.array(altitudes, dtype=float)
    idx = np.arange(len(elev))

    # No pyplot: charts are rendered from worker threads
    fig = Figure(figsize=(10, 4))
    ax = fig.subplots()
    fig.patch.set_facecolor("#1a1a2e")
    _style_ax(ax)

    ax.fill_between(idx, elev, elev.min() - 5, alpha=0.4, color="#0e6b8c")
    ax.plot(idx, elev, color="#38bdf8", linewidth=1.5)
    ax.set_ylabel("Elevation (m)", color="#38bdf8", fontsize=9)

    ticks = _tick_positions(len(elev))
    ax.set_xticks(ticks)
    ax.set_xticklabels([_time_label(timestamps, i) for i in ticks], rotation=30, ha="right")

    caption = (
        f"Elevation {elev.min():.0f} to {elev.max():.0f} m, "
        f"gain {elevation_gain(altitudes):.0f} m"
    )
    fig.suptitle(caption, color="white", fontsize=11, y=1.02)

    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=120, bbox_inches="tight",
                facecolor=fig.get_facecolor())
    buf.seek(0)
    return buf.read(), caption


def elevation_gain(altitudes: List[float]) -> float:
    """Sum of positive steps between consecutive altitude samples."""
    if len(altitudes) < 2:
        return 0.0
    steps = np.diff(np.array(altitudes, dtype=float))
    return float(steps[steps > 0].sum())


def _tick_positions(n: int) -> List[int]:
    if n <= MAX_TIME_TICKS:
        return list(range(n))
    return [int(round(i)) for i in np.linspace(0, n - 1, MAX_TIME_TICKS)]


def _time_label(timestamps: List[datetime], i: int) -> str:
    if i < len(timestamps) and timestamps[i] is not None:
        return timestamps[i].strftime("%H:%M:%S")
    return ""


def _style_ax(ax) -> None:
    ax.set_facecolor("#2d2d4e")
    ax.tick_params(colors="white", labelsize=8)
    ax.spines["bottom"].set_color("#555577")
    ax.spines["left"].set_color("#555577")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
