import pytest

from firewatch.plot_curve import PlotCurveViewer


def test_points_are_appended_in_order():
    viewer = PlotCurveViewer()
    viewer.receive_point(5, 6)
    viewer.receive_point(1.5, 2.5)
    assert viewer.curve_series.points == [(5.0, 6.0), (1.5, 2.5)]


def test_boundaries_are_accepted():
    viewer = PlotCurveViewer()
    viewer.update_x_axis_range(-10, 10)
    viewer.update_y_axis_range(0, 100)
    viewer.receive_point(-10, 0)
    viewer.receive_point(10, 100)
    assert len(viewer.curve_series) == 2


def test_x_out_of_range_raises():
    viewer = PlotCurveViewer()
    viewer.update_x_axis_range(0, 10)
    with pytest.raises(ValueError):
        viewer.receive_point(10.5, 1)
    assert len(viewer.curve_series) == 0


def test_y_out_of_range_raises():
    viewer = PlotCurveViewer()
    viewer.update_y_axis_range(0, 10)
    with pytest.raises(ValueError):
        viewer.receive_point(1, -0.5)
    assert len(viewer.curve_series) == 0