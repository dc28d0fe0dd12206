# firewatch

firewatch is a library of the parts that sit between a fire-detection model,
a thermal camera and an operator's display. It works on numpy arrays and
plain Python objects and holds no display or device code itself.

## Modules

- **Detection post-processing** (`firewatch.postprocess`). Decodes YOLO-style
  detection and segmentation heads into boxes, scores and masks:
  `sigmoid`, `nms_boxes`, `decode_detections` and `decode_classification`,
  with `ModelType`, `InitParams` and `DetResult`.
- **Inference** (`firewatch.inference`). `InferenceModel` wraps a model
  session you supply (any object with a `run(blob)` method returning the
  output tensors). It resizes BGR frames to the model input size, builds the
  input blob (`blob_from_image`), reads the head layout from a warm-up run and
  returns `Detection` records. `validate_model_path` rejects model paths that
  contain Chinese characters.
- **Detector and drawing** (`firewatch.detector`). `Detector.run_detect`
  returns detections for a frame; `Detector.run_detect_with_preview` also
  paints masks and box outlines onto the frame in place, using
  `draw_detections`.
- **Detection classes** (`firewatch.detect_def`). The `DetectClass`
  enumeration (currently only `FIRE`), the `Detection` record, `class_color`
  and `defect_names`, which joins the display names of a set of class ids.
- **Detection control** (`firewatch.detect_manager`). `DetectManager` reads
  its `RGBCam` settings, holds the detecting and paused flags, runs detection
  on frames or image files, and counts frames detected in `detected_id`
  (image files are not counted).
- **Work queue and worker** (`firewatch.detection_queue`,
  `firewatch.detector_worker`). `DetectionQueue` keeps at most the five newest
  `DetectionTask`s, dropping the oldest when full. `DetectorWorker` pops tasks
  and, while the manager is detecting, runs detection on a copy of each frame
  and passes `(source_flag, image, max_box_height, time_cost)` to a callback.
  `DetectorWorkerManager` runs one worker on a background thread.
- **Thermal frames** (`firewatch.thermal`). `process_frame` turns a 16-bit
  radiometric frame (centikelvin) into a blue-to-red false-colour RGB image
  and the minimum, maximum and centre temperatures in °C. `format_overlay`
  renders the status line for those temperatures. `ThermalManager` reads the
  `ThermalCam` settings and starts a camera object you supply, once.
- **Measurement curves** (`firewatch.curve_mode`, `firewatch.curve_color`,
  `firewatch.curve_base`, `firewatch.sweep_curve`, `firewatch.scroll_curve`,
  `firewatch.plot_curve`, `firewatch.measurement`). In-memory curve models:
  - `SweepCurveViewer` writes values at a cursor that wraps around the x range.
  - `ScrollCurveViewer` scrolls its window forward as points arrive and drops
    points left behind.
  - `PlotCurveViewer` accepts only points inside its axis ranges.
  - `MeasurementManager` forwards each new value to an attached viewer.
  - `color_by_index` and `scheme_color` give palette and background colours.
- **Configuration** (`firewatch.config`). `AppConfig` merges YAML files and
  looks values up with `get_bool`, `get_int`, `get_float` and `get_str`.
  `search_file_in_parent_dirs` and `load_app_config` find
  `TFConfigs/TFConfigs.yml` in a starting directory or one of its parents.
- **Start-up** (`firewatch.app`). `init_app` sets up logging, loads the
  configuration and configures a `DetectManager` and a `ThermalManager`;
  a missing or broken configuration file ends the program through
  `exit_app`, which prints the error to stderr and exits with status 1.
  `init_after_widget` starts the thermal camera if `OpenOnInit` is set.

## Requirements

Python 3.10 or newer, with numpy, PyYAML and Pillow.

## Examples

### Thermal frames

```python
import numpy as np
from firewatch.thermal import process_frame, format_overlay

raw = np.full((120, 160), 29815, dtype=np.uint16)   # 25.0 °C everywhere
frame = process_frame(raw)
print(format_overlay(frame))
```

### Non-maximum suppression

```python
from firewatch.postprocess import nms_boxes

boxes = [(10, 10, 100, 100), (12, 12, 100, 100), (300, 300, 50, 50)]
scores = [0.9, 0.8, 0.7]
keep = nms_boxes(boxes, scores, 0.5, 0.5)   # [0, 2]
```

### Class names

```python
from firewatch.detect_def import defect_names

print(defect_names({0}))   # 火焰
```

### Queueing frames

```python
import numpy as np
from firewatch.detection_queue import DetectionQueue

queue = DetectionQueue()
queue.start()
queue.enqueue("main", np.zeros((480, 640, 3), dtype=np.uint8), 12)
task = queue.wait_and_pop(1.0)
```

## Configuration

`load_app_config` raises `ConfigError` when `TFConfigs/TFConfigs.yml` cannot
be found. The sections read by the package are:

| Section      | Keys                                   | Read by                      |
|--------------|----------------------------------------|------------------------------|
| `RGBCam`     | `NeedPrintDebugInfo`, `NeedSaveOriImg` | `DetectManager.init`         |
| `ThermalCam` | `OpenOnInit`, `Width`, `Height`, `FPS` | `ThermalManager.configure`   |

## What the package does not do

- It does not load model files or run a neural network runtime; you pass an
  already loaded session to `InferenceModel`.
- It does not open cameras or video streams; `ThermalManager` starts whatever
  camera object you give it, and frames reach the queue from your own code.
- It has no windows, plotting or video recording; the curve viewers only keep
  their point series in memory.
- It installs no command-line program.