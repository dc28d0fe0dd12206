import pytest

from firewatch.sweep_curve import SweepCurveViewer


def test_first_value_pads_curve_and_sets_update_line():
    viewer = SweepCurveViewer()
    viewer.receive_index_value(3, 5.0)
    assert len(viewer.curve_series) == 4
    assert viewer.curve_series[3] == (3.0, 5.0)
    assert all(y == 0.0 for _, y in viewer.curve_series.points[:3])
    assert viewer.update_series.points == [(3.0, 0.0), (3.0, 255.0)]
    assert viewer.last_update_index == 3


def test_existing_index_is_replaced():
    viewer = SweepCurveViewer()
    viewer.receive_index_value(4, 1.0)
    viewer.receive_index_value(2, 7.5)
    assert len(viewer.curve_series) == 5
    assert viewer.curve_series[2] == (2.0, 7.5)
    assert viewer.update_series.points == [(2.0, 0.0), (2.0, 255.0)]


def test_index_out_of_range_raises():
    viewer = SweepCurveViewer()
    viewer.update_x_axis_range(0, 10)
    with pytest.raises(ValueError):
        viewer.receive_index_value(11, 1.0)
    with pytest.raises(ValueError):
        viewer.receive_index_value(-1, 1.0)


def test_next_value_advances_from_last_index():
    viewer = SweepCurveViewer()
    viewer.receive_next_value(2.5)
    assert viewer.last_update_index == 1
    assert viewer.curve_series[1] == (1.0, 2.5)
    viewer.receive_next_value(3.5)
    assert viewer.curve_series[2] == (2.0, 3.5)


def test_next_value_wraps_to_x_min():
    viewer = SweepCurveViewer()
    viewer.update_x_axis_range(0, 2)
    viewer.receive_index_value(2, 1.0)
    viewer.receive_next_value(9.0)
    assert viewer.last_update_index == 0
    assert viewer.curve_series[0] == (0.0, 9.0)
    assert len(viewer.curve_series) == 3


def test_contiguous_values_replace_curve():
    viewer = SweepCurveViewer()
    viewer.receive_index_values([0, 1, 2], [4.0, 5.0, 6.0])
    assert viewer.curve_series.points == [(0.0, 4.0), (1.0, 5.0), (2.0, 6.0)]
    assert viewer.last_update_index == 2


def test_unordered_values_written_one_by_one():
    viewer = SweepCurveViewer()
    viewer.receive_index_values([2, 0], [8.0, 6.0])
    assert viewer.curve_series[2] == (2.0, 8.0)
    assert viewer.curve_series[0] == (0.0, 6.0)
    assert viewer.last_update_index == 0


def test_mismatched_lengths_raise():
    viewer = SweepCurveViewer()
    with pytest.raises(ValueError):
        viewer.receive_index_values([0, 1], [1.0])


def test_contiguous_values_out_of_range_raise():
    viewer = SweepCurveViewer()
    viewer.update_x_axis_range(0, 1)
    with pytest.raises(ValueError):
        viewer.receive_index_values([1, 2], [1.0, 2.0])


def test_corrupted_update_line_raises():
    viewer = SweepCurveViewer()
    viewer.update_series.append(0, 0)
    with pytest.raises(RuntimeError):
        viewer.receive_index_value(1, 1.0)