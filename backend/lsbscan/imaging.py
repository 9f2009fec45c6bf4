# Decoding images into RGBA pixel buffers for analysis

from typing import NamedTuple, Tuple, Union, BinaryIO
from PIL import Image, UnidentifiedImageError
import logging
import os

from .steganalysis import AnalysisResult, analyze_pixels

logger = logging.getLogger(__name__)

ImageSource = Union[str, os.PathLike, BinaryIO]


class ImageDecodeError(ValueError):
    """Raised when an image cannot be opened or converted to RGBA."""


class DecodedImage(NamedTuple):
    width: int
    height: int
    data: bytes  # RGBA, row-major


def decode_image(source: ImageSource) -> DecodedImage:
    """Decode a file path or binary stream into an immutable RGBA buffer.

    Palette, greyscale and RGB images are converted to RGBA so the buffer always
    has 4 channels per pixel.
    """
    try:
        with Image.open(source) as img:
            if img.mode != 'RGBA':
                img = img.convert('RGBA')
            width, height = img.size
            data = img.tobytes()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeError(f'Could not decode image: {e}') from e
    logger.debug(f'Decoded image {width}x{height}, {len(data)} bytes')
    return DecodedImage(width, height, data)


def analyze_image(source: ImageSource) -> Tuple[DecodedImage, AnalysisResult]:
    decoded = decode_image(source)
    return decoded, analyze_pixels(decoded.data)
