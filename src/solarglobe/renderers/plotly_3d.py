"""Plotly 3D interactive globe renderer.

The Earth is a shaded sphere lit by the computed Sun direction; cities,
the Sun, the Moon and the search pin are placed with ``frame.project``.
Plotly's scene camera is told that +Y is up to match the globe frame.
"""

from collections.abc import Sequence

import numpy as np
import plotly.graph_objects as go

from solarglobe.cities import visible_locations
from solarglobe.config import EARTH_RADIUS, MARKER_RADIUS
from solarglobe.frame import project, project_grid
from solarglobe.models import GlobeState, Location

_BG = "#020611"
_MARKER_COLOR = "#00ffcc"
_PIN_COLOR = "#ff0055"
_SUN_COLOR = "#ffdd66"
_MOON_COLOR = "#c8c8d0"

# Night → twilight → day
_DAY_NIGHT_SCALE = [
    [0.0, "#050a1a"],
    [0.45, "#0b1f3a"],
    [0.55, "#2e6f8e"],
    [1.0, "#7ec8e3"],
]

# Sun/Moon markers sit just outside the globe, not at their scene radii
_BODY_DISTANCE = EARTH_RADIUS * 1.6


def illumination_grid(
    state: GlobeState, resolution: int = 90
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Sphere mesh and per-vertex daylight in [0, 1].

    Daylight is the cosine of the solar zenith angle, stretched so that
    ±6° around the terminator (civil twilight) fades smoothly.
    """
    lats = np.linspace(-90.0, 90.0, resolution)
    lons = np.linspace(-180.0, 180.0, resolution * 2)
    lon_grid, lat_grid = np.meshgrid(lons, lats)
    x, y, z = project_grid(lat_grid, lon_grid, EARTH_RADIUS)

    sun = state.sun_direction
    cos_zenith = (x * sun.x + y * sun.y + z * sun.z) / EARTH_RADIUS
    twilight = np.sin(np.radians(6.0))
    light = np.clip((cos_zenith + twilight) / (2.0 * twilight), 0.0, 1.0)
    return x, y, z, light


def render_globe(
    state: GlobeState,
    locations: Sequence[Location] = (),
    camera_distance: float = 40.0,
    pin: tuple[float, float] | None = None,
) -> go.Figure:
    """Render a GlobeState as a Plotly 3D figure.

    Args:
        state: Sun/Moon state for one frame.
        locations: City dataset. Thinned by ``visible_locations``.
        camera_distance: Scene-unit distance used for marker level of detail.
        pin: Optional (lat, lon) for the search result pin.

    Returns:
        Plotly Figure object.
    """
    x, y, z, light = illumination_grid(state)
    earth_trace = go.Surface(
        x=x,
        y=y,
        z=z,
        surfacecolor=light,
        colorscale=_DAY_NIGHT_SCALE,
        cmin=0.0,
        cmax=1.0,
        showscale=False,
        hoverinfo="skip",
        name="earth",
    )

    traces = [earth_trace]

    shown = visible_locations(locations, camera_distance)
    if shown:
        points = [project(loc.lat, loc.lon, MARKER_RADIUS) for loc in shown]
        traces.append(
            go.Scatter3d(
                x=[p.x for p in points],
                y=[p.y for p in points],
                z=[p.z for p in points],
                mode="markers",
                marker=dict(size=2, color=_MARKER_COLOR, opacity=0.8),
                text=[f"{loc.name} ({loc.timezone})" for loc in shown],
                hoverinfo="text",
                name="cities",
            )
        )

    sun = state.sun_direction.scaled(_BODY_DISTANCE)
    moon = project(state.moon_lat, state.moon_lon, _BODY_DISTANCE)
    traces.append(
        go.Scatter3d(
            x=[sun.x, moon.x],
            y=[sun.y, moon.y],
            z=[sun.z, moon.z],
            mode="markers",
            marker=dict(size=[14, 8], color=[_SUN_COLOR, _MOON_COLOR]),
            text=["Sun", "Moon"],
            hoverinfo="text",
            name="bodies",
        )
    )

    if pin is not None:
        p = project(pin[0], pin[1], MARKER_RADIUS * 1.03)
        traces.append(
            go.Scatter3d(
                x=[p.x],
                y=[p.y],
                z=[p.z],
                mode="markers",
                marker=dict(size=7, color=_PIN_COLOR, symbol="diamond"),
                hoverinfo="skip",
                name="pin",
            )
        )

    fig = go.Figure(data=traces)

    # Camera looks at the pin (or the prime meridian) from outside the globe
    look_lat, look_lon = pin if pin is not None else (0.0, 0.0)
    eye = project(look_lat, look_lon, 2.0)
    axis = dict(visible=False, showbackground=False)
    # User camera survives clock ticks until the pin changes
    revision = "pin:none" if pin is None else f"pin:{pin[0]:.4f},{pin[1]:.4f}"
    fig.update_layout(
        paper_bgcolor=_BG,
        uirevision=revision,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        height=700,
        scene=dict(
            xaxis=axis,
            yaxis=axis,
            zaxis=axis,
            aspectmode="data",
            bgcolor=_BG,
            uirevision=revision,
            camera=dict(
                up=dict(x=0, y=1, z=0),
                eye=dict(x=eye.x, y=eye.y, z=eye.z),
            ),
        ),
    )
    return fig
