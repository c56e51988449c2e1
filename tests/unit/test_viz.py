"""Unit tests for lattice visualization and the mouse event layer."""

from types import SimpleNamespace

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.backend_bases import MouseEvent
import pytest

from rigidgrid.core.grid import init_grid
from rigidgrid.core.propagation import propagate
from rigidgrid.core.vector import add, subtract, scale_divide
from rigidgrid.analysis.attenuation import attenuation_profile
from rigidgrid.viz import (
    link_segments,
    plot_grid,
    plot_displacement,
    plot_attenuation,
    save_figure,
    InteractiveGrid,
)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestLinkSegments:
    """Tests for link_segments."""

    def test_segment_count(self):
        segments = link_segments(init_grid(4, 3))
        assert segments.shape == (3 * 3 + 4 * 2, 2, 2)

    def test_segments_scaled(self):
        segments = link_segments(init_grid(2, 1), scale=10.0)
        np.testing.assert_array_equal(segments[0], [[10.0, 10.0], [20.0, 10.0]])

    def test_all_unit_length(self):
        segments = link_segments(init_grid(5, 5))
        lengths = np.linalg.norm(segments[:, 1] - segments[:, 0], axis=-1)
        assert np.allclose(lengths, 1.0)


class TestPlots:
    """Tests for static plots."""

    def test_plot_grid_returns_fig_ax(self, small_grid):
        fig, ax = plot_grid(small_grid, scale=50.0, title="grid")
        assert ax.get_title() == "grid"
        assert len(ax.collections) == 2  # links + nodes

    def test_plot_grid_y_axis_points_down(self, small_grid):
        _, ax = plot_grid(small_grid, scale=50.0)
        bottom, top = ax.get_ylim()
        assert bottom > top

    def test_plot_grid_on_existing_axes(self, small_grid):
        fig, ax = plt.subplots()
        fig2, ax2 = plot_grid(small_grid, ax=ax, highlight=(1, 1))
        assert fig2 is fig
        assert ax2 is ax

    def test_plot_single_node(self):
        _, ax = plot_grid(init_grid(1, 1))
        assert len(ax.collections) == 1  # nodes only

    def test_plot_displacement_draws_arrows(self, small_grid):
        after = propagate(small_grid, (1, 1), (0.2, 0.0))
        _, ax = plot_displacement(small_grid, after, scale=50.0)
        assert len(ax.collections) == 3  # links + nodes + quiver

    def test_plot_displacement_without_motion(self, small_grid):
        _, ax = plot_displacement(small_grid, small_grid.copy())
        assert len(ax.collections) == 2

    def test_plot_attenuation(self, medium_grid):
        profile = attenuation_profile(medium_grid, (10, 10), (0.4, 0.3))
        _, ax = plot_attenuation(profile)
        assert ax.get_yscale() == "log"

    def test_save_figure(self, small_grid, tmp_path):
        fig, _ = plot_grid(small_grid)
        path = tmp_path / "grid.png"
        save_figure(fig, path)
        assert path.exists()
        assert path.stat().st_size > 0


def _mouse(view, name, x, y, button=1):
    """A canvas event at data point (x, y) of the view's axes."""
    px, py = view.ax.transData.transform((x, y))
    return MouseEvent(name, view.fig.canvas, px, py, button=button)


def _view(session, ax=None):
    view = InteractiveGrid(session, ax=ax)
    view.fig.canvas.draw()
    return view


class TestInteractiveGrid:
    """Tests for pointer event handling."""

    def test_pointer_xy_in_data_coordinates(self, session):
        view = _view(session)
        x, y = view.pointer_xy(_mouse(view, "motion_notify_event", 150.0, 100.0))
        # Pixel positions are whole numbers, so allow one pixel of rounding
        assert x == pytest.approx(150.0, abs=1.0)
        assert y == pytest.approx(100.0, abs=1.0)

    def test_press_move_release(self, session):
        view = _view(session)
        view.on_press(_mouse(view, "button_press_event", 101.0, 99.0))
        assert session.is_dragging
        assert session.drag.node == (1, 1)

        motion = _mouse(view, "motion_notify_event", 111.0, 99.0)
        view.on_motion(motion)
        delta = session.delta_for(view.pointer_xy(motion))
        assert delta.x == pytest.approx(0.2, abs=0.05)
        assert session.flux_grid == propagate(session.grid, (1, 1), delta)

        view.on_release(_mouse(view, "button_release_event", 111.0, 99.0))
        assert not session.is_dragging
        assert session.grid.position((1, 1)).x == pytest.approx(2.2, abs=0.05)

    def test_press_off_node_ignored(self, session):
        view = _view(session)
        view.on_press(_mouse(view, "button_press_event", 75.0, 75.0))
        assert not session.is_dragging

    def test_right_button_ignored(self, session):
        view = _view(session)
        view.on_press(_mouse(view, "button_press_event", 100.0, 100.0, button=3))
        assert not session.is_dragging

    def test_motion_without_position_ignored(self, session):
        view = _view(session)
        view.on_press(_mouse(view, "button_press_event", 100.0, 100.0))
        view.on_motion(SimpleNamespace(x=None, y=None))
        assert session.flux_grid is session.grid

    def test_drag_tracks_pointer_over_other_axes(self, session):
        fig, (ax, other) = plt.subplots(1, 2, figsize=(10, 5))
        view = _view(session, ax=ax)
        view.on_press(_mouse(view, "button_press_event", 100.0, 100.0))
        anchor = session.drag.anchor

        px, py = other.transAxes.transform((0.5, 0.5))
        event = MouseEvent("motion_notify_event", fig.canvas, px, py)
        assert event.inaxes is other
        view.on_motion(event)

        pointer = ax.transData.inverted().transform((event.x, event.y))
        expected = add((2.0, 2.0), scale_divide(subtract(pointer, anchor), 50.0))
        moved = session.flux_grid.position((1, 1))
        assert moved.x == pytest.approx(expected.x)
        assert moved.y == pytest.approx(expected.y)
        # The other axes lies to the right of the lattice
        assert moved.x > 2.0

    def test_drag_tracks_pointer_outside_all_axes(self, session):
        view = _view(session)
        view.on_press(_mouse(view, "button_press_event", 100.0, 100.0))

        event = MouseEvent("motion_notify_event", view.fig.canvas, 1, 1)
        assert event.inaxes is None
        view.on_motion(event)
        assert session.flux_grid != session.grid

    def test_redraw_tracks_working_grid(self, session):
        view = _view(session)
        view.on_press(_mouse(view, "button_press_event", 100.0, 100.0))
        view.on_motion(_mouse(view, "motion_notify_event", 100.0, 125.0))
        offsets = np.asarray(view.nodes.get_offsets())
        # Node (1, 1) is the 7th node in column-major order of a 5x5 grid
        np.testing.assert_allclose(offsets[1 * 5 + 1], [100.0, 125.0], atol=1.5)

    def test_disconnect(self, session):
        view = _view(session)
        view.disconnect()
        assert view.cids == []
