"""Matplotlib static PNG renderer — equirectangular day/night map."""

from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from solarglobe.frame import project_grid
from solarglobe.models import GlobeState, Location

_ROOT = Path(__file__).parent.parent.parent.parent


def render_static_map(
    state: GlobeState, locations: Sequence[Location] = (), width: int = 12
) -> Figure:
    """Render a GlobeState as a flat day/night map.

    Args:
        state: Sun/Moon state for one frame.
        locations: Cities drawn as dots.
        width: Output image width in inches (height is half).

    Returns:
        matplotlib Figure object.
    """
    lats = np.linspace(-90.0, 90.0, 181)
    lons = np.linspace(-180.0, 180.0, 361)
    lon_grid, lat_grid = np.meshgrid(lons, lats)
    x, y, z = project_grid(lat_grid, lon_grid, 1.0)
    sun = state.sun_direction
    cos_zenith = x * sun.x + y * sun.y + z * sun.z

    fig, ax = plt.subplots(figsize=(width, width / 2))
    fig.patch.set_facecolor("black")
    ax.set_facecolor("black")

    ax.pcolormesh(
        lons,
        lats,
        np.clip(cos_zenith, -0.1, 0.1),
        cmap="cividis",
        shading="auto",
        zorder=0,
    )
    ax.contour(lons, lats, cos_zenith, levels=[0.0], colors="#7ec8e3", linewidths=0.8)

    if locations:
        ax.scatter(
            [loc.lon for loc in locations],
            [loc.lat for loc in locations],
            s=1,
            color="white",
            linewidths=0,
            zorder=2,
        )

    ax.scatter([state.sun_lon], [state.sun_lat], s=120, color="#ffdd66", zorder=3)
    ax.scatter([state.moon_lon], [state.moon_lat], s=60, color="#c8c8d0", zorder=3)

    ax.set_xlim(-180, 180)
    ax.set_ylim(-90, 90)
    ax.set_title(
        state.instant.strftime("%Y-%m-%d %H:%M UTC"), color="#e8e8e8", fontsize=10
    )
    ax.axis("off")

    return fig


def save_static_map(
    state: GlobeState,
    locations: Sequence[Location] = (),
    output_path: Path | None = None,
) -> Path:
    """Save a GlobeState as a PNG file.

    Args:
        state: Sun/Moon state for one frame.
        locations: Cities drawn as dots.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        filename = f"daynight__{state.instant.strftime('%Y_%m_%d_%H_%M')}.png"
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_map(state, locations)
    fig.savefig(output_path, facecolor="black")
    plt.close(fig)
    return output_path
