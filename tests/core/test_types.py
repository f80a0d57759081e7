"""
Tests for core data types
"""

import numpy as np
import pytest

from filterkit.core import (
    FilterResult,
    FilterStatus,
    PixelBuffer,
    RunConfig,
    RunSummary,
)


class TestPixelBuffer:
    """Test PixelBuffer construction and immutability"""

    def test_dimensions(self, test_buffer):
        """Test width/height/channels come from the array shape"""
        assert test_buffer.width == 64
        assert test_buffer.height == 48
        assert test_buffer.channels == 3
        assert test_buffer.shape == (48, 64, 3)
        assert test_buffer.color_channels == 3

    def test_samples_length(self, test_buffer):
        """Test flat samples view covers every channel of every pixel"""
        assert test_buffer.samples.shape == (64 * 48 * 3,)

    def test_pixels_are_read_only(self, test_buffer):
        """Test writes to the shared buffer are rejected"""
        with pytest.raises(ValueError):
            test_buffer.pixels[0, 0, 0] = 1
        with pytest.raises(ValueError):
            test_buffer.samples[0] = 1

    def test_buffer_owns_its_storage(self):
        """Test the caller's array is neither shared nor frozen"""
        source = np.zeros((4, 4, 3), dtype=np.uint8)
        buffer = PixelBuffer(source)
        assert not np.shares_memory(source, buffer.pixels)
        assert source.flags.writeable
        source[1, 1, 0] = 99
        assert buffer.pixels[1, 1, 0] == 0

    def test_view_input_is_copied(self):
        """Test a view of a caller-owned array is detached from it"""
        source = np.zeros((4, 4, 3), dtype=np.uint8)
        buffer = PixelBuffer(source[1:3])
        source[1, 0, 0] = 99
        assert buffer.pixels[0, 0, 0] == 0
        assert source.flags.writeable

    def test_from_samples(self):
        """Test building from a flat row-major sequence"""
        buffer = PixelBuffer.from_samples(2, 1, 3, [1, 2, 3, 4, 5, 6])
        assert buffer.shape == (1, 2, 3)
        assert buffer.pixels[0, 1].tolist() == [4, 5, 6]

    def test_from_bytes(self):
        """Test building from raw bytes"""
        buffer = PixelBuffer.from_samples(1, 1, 4, bytes([10, 20, 30, 40]))
        assert buffer.samples.tolist() == [10, 20, 30, 40]

    def test_from_samples_length_mismatch(self):
        """Test sample count must match the dimensions"""
        with pytest.raises(ValueError, match="expected 6 samples"):
            PixelBuffer.from_samples(2, 1, 3, [1, 2, 3])

    def test_from_samples_out_of_range(self):
        """Test samples must fit in a byte"""
        with pytest.raises(ValueError):
            PixelBuffer.from_samples(1, 1, 1, [256])

    @pytest.mark.parametrize("channels", [2, 5])
    def test_unsupported_channels(self, channels):
        """Test only 1, 3 and 4 channel images are accepted"""
        with pytest.raises(ValueError, match="unsupported channel count"):
            PixelBuffer(np.zeros((2, 2, channels), dtype=np.uint8))

    def test_rejects_wrong_dtype(self):
        """Test non-uint8 data is rejected"""
        with pytest.raises(ValueError, match="uint8"):
            PixelBuffer(np.zeros((2, 2, 3), dtype=np.float32))

    def test_rejects_2d_array(self):
        """Test the channel axis is required"""
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((2, 2), dtype=np.uint8))

    def test_rejects_empty_image(self):
        """Test zero width or height is rejected"""
        with pytest.raises(ValueError, match="non-empty"):
            PixelBuffer(np.zeros((0, 2, 3), dtype=np.uint8))


class TestRunSummary:
    """Test RunSummary aggregation"""

    def _result(self, name, status):
        return FilterResult(name=name, elapsed=0.1, output_path=f"{name}.jpg", status=status)

    def test_all_succeeded(self):
        """Test summary with only successful results"""
        summary = RunSummary(
            total_elapsed=1.0, cpu_user=0.5, cpu_system=0.1,
            results=(self._result("a", FilterStatus.SUCCESS), self._result("b", FilterStatus.SUCCESS)),
        )
        assert summary.all_succeeded
        assert len(summary.succeeded) == 2
        assert summary.failed == []

    def test_failures_are_counted(self):
        """Test failed results stay accountable in the summary"""
        summary = RunSummary(
            total_elapsed=1.0, cpu_user=0.5, cpu_system=0.1,
            results=(self._result("a", FilterStatus.SUCCESS), self._result("b", FilterStatus.FAILURE)),
        )
        assert not summary.all_succeeded
        assert [r.name for r in summary.failed] == ["b"]

    def test_summary_is_immutable(self):
        """Test the summary cannot be modified after construction"""
        summary = RunSummary(total_elapsed=1.0, cpu_user=0.0, cpu_system=0.0)
        with pytest.raises(AttributeError):
            summary.total_elapsed = 2.0


class TestRunConfig:
    """Test RunConfig defaults and output paths"""

    def test_defaults(self):
        config = RunConfig()
        assert config.input_path == "input.jpg"
        assert config.quality == 100
        assert config.progress_cadence == pytest.approx(0.02)
        assert config.parallel is True
        assert config.strict is False

    def test_output_path(self, tmp_path):
        config = RunConfig(output_dir=str(tmp_path))
        assert config.output_path("output_gray.jpg") == str(tmp_path / "output_gray.jpg")
