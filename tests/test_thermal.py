import numpy as np
import pytest

from firewatch.config import AppConfig
from firewatch.thermal import ThermalFrame, ThermalManager, format_overlay, process_frame


def _frame():
    return np.array([[27315, 30000, 31000], [29000, 30965, 32000], [28000, 37315, 29500]])


def test_temperatures():
    frame = process_frame(_frame())
    assert frame.min_temp_c == pytest.approx(0.0)
    assert frame.max_temp_c == pytest.approx(100.0)
    assert frame.center_temp_c == pytest.approx(30965 / 100 - 273.15)


def test_image_shape_and_extremes():
    frame = process_frame(_frame())
    assert frame.image.shape == (3, 3, 3)
    assert frame.image.dtype == np.uint8
    assert tuple(frame.image[2, 1]) == (255, 0, 0)
    cold = frame.image[0, 0]
    assert cold[2] == 255 and cold[0] == 0


def test_hotter_pixels_are_redder():
    frame = process_frame(np.array([[100, 200, 300, 400]]))
    reds = [int(px[0]) - int(px[2]) for px in frame.image[0]]
    assert reds == sorted(reds)


def test_uniform_frame_single_colour():
    frame = process_frame(np.full((4, 5), 30000))
    assert (frame.image == frame.image[0, 0]).all()
    assert frame.min_temp_c == frame.max_temp_c == frame.center_temp_c


@pytest.mark.parametrize("bad", [np.zeros((0, 3)), np.zeros(5), np.zeros((2, 2, 2))])
def test_bad_shape_raises(bad):
    with pytest.raises(ValueError):
        process_frame(bad)


def test_format_overlay():
    frame = ThermalFrame(np.zeros((1, 1, 3), np.uint8), 0.0, 100.0, 36.6)
    assert format_overlay(frame) == "Min: 0.0 °C   Max: 100.0 °C   Center: 36.6 °C"


class FakeCamera:
    def __init__(self, result=True):
        self.result = result
        self.calls = []

    def start(self, width, height, fps):
        self.calls.append((width, height, fps))
        return self.result


def _config(tmp_path, open_on_init):
    path = tmp_path / "c.yml"
    path.write_text(
        f"ThermalCam:\n  OpenOnInit: {open_on_init}\n  Width: 80\n  Height: 60\n  FPS: 27\n",
        encoding="utf-8",
    )
    cfg = AppConfig()
    cfg.add_yaml_file(path)
    return cfg


def test_configure_and_start_once(tmp_path):
    camera = FakeCamera()
    manager = ThermalManager(camera)
    manager.configure(_config(tmp_path, "true"))
    manager.init_after_widget()
    manager.start()
    assert camera.calls == [(80, 60, 27)]
    assert manager.started is True


def test_no_open_on_init(tmp_path):
    camera = FakeCamera()
    manager = ThermalManager(camera)
    manager.configure(_config(tmp_path, "false"))
    manager.init_after_widget()
    assert camera.calls == []
    assert manager.started is False


def test_failed_start_still_marks_started():
    camera = FakeCamera(result=False)
    manager = ThermalManager(camera)
    manager.start()
    manager.start()
    assert camera.calls == [(160, 120, 9)]
    assert manager.started is True


def test_start_without_camera_then_attach():
    manager = ThermalManager()
    manager.start()
    assert manager.started is False
    camera = FakeCamera()
    manager.camera = camera
    manager.start()
    assert camera.calls == [(160, 120, 9)]