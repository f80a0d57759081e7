"""
OpenImageIO adapter for decoding and encoding 8-bit images.

This is the only module that talks to OIIO. Callers see PixelBuffer and
numpy arrays going in and DecodeError/EncodeError coming out.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
import OpenImageIO as oiio

from ..core import (
    SUPPORTED_CHANNELS,
    PixelBuffer,
    DecodeError,
    EncodeError,
)

logger = logging.getLogger(__name__)

JPEG_EXTENSIONS = {".jpg", ".jpeg"}


class OiioAdapter:
    """Thin wrapper for robust OIIO bindings."""

    @staticmethod
    def read_image(filepath: Union[str, Path]) -> PixelBuffer:
        """
        Decode an image file into a read-only PixelBuffer.

        Channel count is taken from the file. Pixels are converted to uint8.

        Raises:
            DecodeError: file missing, unreadable, or unsupported
        """
        path = Path(filepath)
        if not path.is_file():
            raise DecodeError(f"Input file not found: {path}")

        inp = oiio.ImageInput.open(str(path))
        if not inp:
            raise DecodeError(f"Cannot open {path}: {oiio.geterror() or 'unsupported format'}")

        try:
            spec = inp.spec()
            width, height, nchannels = spec.width, spec.height, spec.nchannels
            logger.debug("Decoding %s: %dx%d, %d channels", path, width, height, nchannels)

            if nchannels not in SUPPORTED_CHANNELS:
                raise DecodeError(f"Unsupported channel count {nchannels} in {path}")

            pixels = inp.read_image(oiio.UINT8)
            if pixels is None:
                raise DecodeError(f"Failed to read pixels from {path}: {inp.geterror()}")

            pixels = np.asarray(pixels, dtype=np.uint8).reshape(height, width, nchannels)
            return PixelBuffer(pixels)

        except DecodeError:
            raise
        except Exception as e:
            raise DecodeError(f"Failed to decode {path}: {e}") from e
        finally:
            inp.close()

    @staticmethod
    def write_image(
        filepath: Union[str, Path],
        pixels: np.ndarray,
        quality: int = 100,
    ) -> None:
        """
        Encode a (height, width, channels) uint8 array to a file.

        Output format follows the file extension. JPEG output is written at
        the given quality.

        Raises:
            EncodeError: output could not be created, opened, or written
        """
        path_str = str(filepath)
        height, width, nchannels = pixels.shape

        out_spec = oiio.ImageSpec(width, height, nchannels, oiio.UINT8)
        if Path(path_str).suffix.lower() in JPEG_EXTENSIONS:
            out_spec.attribute("Compression", f"jpeg:{quality}")

        out = oiio.ImageOutput.create(path_str)
        if not out:
            raise EncodeError(f"Cannot create output {path_str}: {oiio.geterror() or 'unknown format'}")

        try:
            if not out.open(path_str, out_spec):
                raise EncodeError(f"Cannot open {path_str} for writing: {out.geterror()}")

            if not out.write_image(np.ascontiguousarray(pixels)):
                raise EncodeError(f"Failed to write {path_str}: {out.geterror()}")

            if not out.close():
                raise EncodeError(f"Failed to finalize {path_str}: {out.geterror()}")
            out = None

            logger.debug("Wrote %s (%dx%d, %d channels)", path_str, width, height, nchannels)

        except EncodeError:
            raise
        except Exception as e:
            raise EncodeError(f"Write failed for {path_str}: {e}") from e
        finally:
            # Ensure output object is closed on error
            if out is not None:
                out.close()

    @staticmethod
    def get_oiio_version() -> str:
        """Return OIIO version string."""
        if hasattr(oiio, "__version__"):
            return str(oiio.__version__)
        return "unknown"
