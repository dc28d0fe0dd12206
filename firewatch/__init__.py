"""Fire detection pipeline: detection decoding, thermal frames, work queues and measurement curves."""

__version__ = "0.1.0"