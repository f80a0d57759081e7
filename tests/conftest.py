"""
Pytest configuration and fixtures for filterkit tests
"""

import io
import itertools

import numpy as np
import pytest

from filterkit.core import CpuTimes, PixelBuffer, RunConfig
from filterkit.oiio import OiioAdapter
from filterkit.processing import ConsoleReporter


class FakeClock:
    """Deterministic clock: now() advances by a fixed step per call."""

    def __init__(self, step=0.25, cpu=None):
        self.step = step
        self._ticks = itertools.count()
        self._cpu = list(cpu or [CpuTimes(1.0, 0.5), CpuTimes(3.5, 1.25)])

    def now(self):
        return next(self._ticks) * self.step

    def cpu_times(self):
        if len(self._cpu) > 1:
            return self._cpu.pop(0)
        return self._cpu[0]


@pytest.fixture
def test_pixels():
    """Random RGB test image, reproducible across runs"""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(48, 64, 3), dtype=np.uint8)


@pytest.fixture
def test_buffer(test_pixels):
    return PixelBuffer(test_pixels.copy())


@pytest.fixture
def write_png(tmp_path):
    """Write a numpy image to a lossless PNG under tmp_path, return its path"""
    def _write(pixels, name="input.png"):
        path = tmp_path / name
        OiioAdapter.write_image(path, pixels)
        return path
    return _write


@pytest.fixture
def input_image(write_png, test_pixels):
    """Path to a small RGB PNG on disk"""
    return write_png(test_pixels)


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "out"


@pytest.fixture
def console():
    """Reporter writing into an in-memory stream"""
    return ConsoleReporter(io.StringIO())


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def run_config(input_image, output_dir):
    return RunConfig(input_path=str(input_image), output_dir=str(output_dir))
