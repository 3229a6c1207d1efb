"""Plotly 3D renderers — sky dome and globe.

Translates the plain records produced by astralink.compute and
astralink.animation into plotly scene primitives. Scene frame is y-up;
plotly cameras are given ``up=(0, 1, 0)`` so coordinates pass through unchanged.
"""

import numpy as np
import plotly.graph_objects as go

from astralink.animation import CAMERA_DISTANCE
from astralink.compute import DOME_RADIUS
from astralink.geo import altitude_radius, project, project_observer
from astralink.models import Observer, ScenePoint, SkyFrame, ViewSample
from astralink.orbits import DOME_SATELLITES

EARTH_RADIUS = 2.5
ISS_ALTITUDE_SCALE = 4.0

_BG = "#050a1a"
_LINE_COLOR = "#22d3ee"
_LABEL_COLOR = "#22d3ee"
_HORIZON_COLOR = "#334466"
_SATELLITE_COLOR = "#facc15"
_MARKER_COLOR = "#00ffff"
_OCEAN_SCALE = [[0.0, "#0b2a4a"], [1.0, "#1d6fa5"]]

# Scene radius → marker pixels
_PX_PER_UNIT = 4.0
_PX_MIN = 2.0
_PX_MAX = 16.0
_LABEL_OFFSET = 3.0


def _rgba(hex_color: str, opacity: float) -> str:
    """'#rrggbb' + opacity → 'rgba(r,g,b,a)'. Scatter3d has no per-marker opacity."""
    h = hex_color.lstrip("#")
    if len(h) != 6:
        h = "ffffff"
    r, g, b = (int(h[i : i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r},{g},{b},{opacity:.3f})"


def _scene_axes(half_range: float) -> dict:
    axis = dict(visible=False, range=[-half_range, half_range], autorange=False)
    return dict(xaxis=axis, yaxis=axis, zaxis=axis, aspectmode="cube", bgcolor=_BG)


def _eye(position: ScenePoint, half_range: float) -> dict:
    # plotly eye units: the scene cube spans [-1, 1] along each axis
    return dict(
        x=position.x / half_range,
        y=position.y / half_range,
        z=position.z / half_range,
    )


def render_sky_dome(
    frame: SkyFrame,
    show_labels: bool = True,
    show_constellations: bool = True,
    t_seconds: float | None = None,
    radius: float = DOME_RADIUS,
) -> go.Figure:
    """Render a SkyFrame as a 3D dome seen from just above the observer.

    Args:
        frame: Fully computed sky state.
        show_labels: Draw names of labeled stars.
        show_constellations: Draw constellation segments.
        t_seconds: Elapsed animation time for decorative satellites; omitted if None.
        radius: Dome radius the frame was computed with.

    Returns:
        Plotly Figure object.
    """
    traces: list[go.Scatter3d] = []

    # Horizon ring at y=0
    ring = np.linspace(0.0, 2 * np.pi, 181)
    traces.append(
        go.Scatter3d(
            x=radius * np.sin(ring),
            y=np.zeros_like(ring),
            z=-radius * np.cos(ring),
            mode="lines",
            line=dict(color=_HORIZON_COLOR, width=2),
            hoverinfo="skip",
            name="horizon",
        )
    )

    if show_constellations and frame.segments:
        lx: list[float | None] = []
        ly: list[float | None] = []
        lz: list[float | None] = []
        for seg in frame.segments:
            lx += [seg.start.x, seg.end.x, None]
            ly += [seg.start.y, seg.end.y, None]
            lz += [seg.start.z, seg.end.z, None]
        traces.append(
            go.Scatter3d(
                x=lx,
                y=ly,
                z=lz,
                mode="lines",
                line=dict(color=_LINE_COLOR, width=1),
                opacity=0.4,
                hoverinfo="skip",
                name="constellations",
            )
        )

    if frame.stars:
        xs = np.array([s.point.x for s in frame.stars])
        ys = np.array([s.point.y for s in frame.stars])
        zs = np.array([s.point.z for s in frame.stars])
        sizes = np.clip(np.array([s.size for s in frame.stars]) * _PX_PER_UNIT, _PX_MIN, _PX_MAX)
        colors = [_rgba(s.star.color, s.opacity) for s in frame.stars]
        traces.append(
            go.Scatter3d(
                x=xs,
                y=ys,
                z=zs,
                mode="markers",
                marker=dict(size=sizes, color=colors, line=dict(width=0)),
                text=[s.name for s in frame.stars],
                customdata=[round(s.horizontal.alt_deg, 1) for s in frame.stars],
                hovertemplate="%{text}<br>alt %{customdata}°<extra></extra>",
                name="stars",
            )
        )

        if show_labels:
            named = [s for s in frame.stars if s.name]
            traces.append(
                go.Scatter3d(
                    x=[s.point.x for s in named],
                    y=[s.point.y + s.size + _LABEL_OFFSET for s in named],
                    z=[s.point.z for s in named],
                    mode="text",
                    text=[s.name for s in named],
                    textfont=dict(color=_LABEL_COLOR, size=11),
                    hoverinfo="skip",
                    name="labels",
                )
            )

    if t_seconds is not None:
        sats = {name: orbit.position(t_seconds) for name, orbit in DOME_SATELLITES.items()}
        traces.append(
            go.Scatter3d(
                x=[p.x for p in sats.values()],
                y=[p.y for p in sats.values()],
                z=[p.z for p in sats.values()],
                mode="markers+text" if show_labels else "markers",
                text=list(sats),
                textposition="top center",
                marker=dict(size=4, color=_SATELLITE_COLOR, symbol="diamond"),
                textfont=dict(color=_SATELLITE_COLOR, size=10),
                hoverinfo="text",
                name="satellites",
            )
        )

    fig = go.Figure(data=traces)
    fig.update_layout(
        paper_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        scene=_scene_axes(radius),
        # Low eye south of the zenith axis, looking across the dome
        scene_camera=dict(
            up=dict(x=0, y=1, z=0),
            center=dict(x=0, y=0.2, z=0),
            eye=dict(x=0.0, y=0.25, z=0.9),
        ),
    )
    return fig


def _globe_surface(earth_radius: float, resolution: int = 48) -> go.Surface:
    lats = np.linspace(-90.0, 90.0, resolution)
    lons = np.linspace(-180.0, 180.0, resolution * 2)
    lon_grid, lat_grid = np.meshgrid(lons, lats)
    # Same convention as geo.project, vectorised
    phi = np.radians(90.0 - lat_grid)
    theta = np.radians(lon_grid + 180.0)
    x = -(earth_radius * np.sin(phi) * np.cos(theta))
    y = earth_radius * np.cos(phi)
    z = earth_radius * np.sin(phi) * np.sin(theta)
    return go.Surface(
        x=x,
        y=y,
        z=z,
        surfacecolor=np.abs(lat_grid),
        colorscale=_OCEAN_SCALE,
        showscale=False,
        hoverinfo="skip",
        opacity=1.0,
    )


def render_globe(
    observer: Observer,
    camera: ViewSample | ScenePoint,
    earth_radius: float = EARTH_RADIUS,
    iss: ScenePoint | tuple[float, float, float] | None = None,
) -> go.Figure:
    """Render the globe with the observer marker, seen from the camera position.

    Args:
        observer: Selected location; drawn as a marker on the surface.
        camera: Current camera sample or position; the camera looks at the origin.
        earth_radius: Globe radius in scene units.
        iss: Optional ISS, either a scene point (e.g. from GLOBE_ISS_ORBIT)
            or a ground point (latitude, longitude, altitude km).

    Returns:
        Plotly Figure object.
    """
    position = camera.position if isinstance(camera, ViewSample) else camera
    marker = project_observer(observer, earth_radius * 1.01)
    traces = [
        _globe_surface(earth_radius),
        go.Scatter3d(
            x=[marker.x],
            y=[marker.y],
            z=[marker.z],
            mode="markers",
            marker=dict(size=6, color=_MARKER_COLOR),
            hovertext=f"{observer.latitude:.4f}°, {observer.longitude:.4f}°",
            hoverinfo="text",
            name="observer",
        ),
    ]

    if iss is not None:
        if isinstance(iss, ScenePoint):
            p = iss
        else:
            lat, lon, alt_km = iss
            p = project(lat, lon, altitude_radius(earth_radius, alt_km, scale=ISS_ALTITUDE_SCALE))
        traces.append(
            go.Scatter3d(
                x=[p.x],
                y=[p.y],
                z=[p.z],
                mode="markers+text",
                text=["ISS"],
                textposition="top center",
                marker=dict(size=4, color=_SATELLITE_COLOR, symbol="square"),
                textfont=dict(color=_SATELLITE_COLOR, size=10),
                hoverinfo="text",
                name="iss",
            )
        )

    half_range = max(CAMERA_DISTANCE, position.distance(), earth_radius) / 2
    fig = go.Figure(data=traces)
    fig.update_layout(
        paper_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        scene=_scene_axes(half_range),
        scene_camera=dict(
            up=dict(x=0, y=1, z=0),
            center=dict(x=0, y=0, z=0),
            eye=_eye(position, half_range),
        ),
    )
    return fig
