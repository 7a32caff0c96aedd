"""
Still-image encoding and decoding for captures and downloads.
"""

from __future__ import annotations

import base64
import binascii
import io

import PIL.Image

from filtercam.buffer import PixelBuffer
from filtercam.errors import CodecError

SUPPORTED_FORMATS = {"jpeg", "png", "bmp", "gif", "webp"}

DEFAULT_JPEG_QUALITY = 92


def _normalize_format(filetype: str) -> str:
    filetype = filetype.lstrip(".").lower()
    if filetype == "jpg":
        filetype = "jpeg"
    if filetype not in SUPPORTED_FORMATS:
        raise CodecError(f"Unsupported image format '{filetype}'")
    return filetype


def mime_type_for(filetype: str) -> str:
    """MIME type for a format name such as 'jpg' or 'png'."""
    return f"image/{_normalize_format(filetype)}"


def encode(
    buffer: PixelBuffer,
    filetype: str = "jpeg",
    quality: int = DEFAULT_JPEG_QUALITY,
) -> bytes:
    """
    Compresses the buffer and returns the compressed file's data.

    Formats without alpha support get the image composited onto a white
    background.

    :param buffer: The pixels to encode
    :param filetype: "jpeg"/"jpg", "png", "bmp", "gif" or "webp"
    :param quality: The image quality between 0 (worst) and 100 (best),
        used by lossy formats only
    :return: The encoded image
    """
    filetype = _normalize_format(filetype)
    if buffer.width == 0 or buffer.height == 0:
        raise CodecError("Cannot encode an empty image")
    if not 0 <= quality <= 100:
        raise CodecError(f"Quality must be between 0 and 100, got {quality}")
    image = buffer.to_pil()
    parameters = {}
    if filetype in {"jpeg", "bmp"}:
        background = PIL.Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image, (0, 0), image)
        image = background
    if filetype in {"jpeg", "webp"}:
        parameters["quality"] = quality
    output_stream = io.BytesIO()
    try:
        image.save(output_stream, format=filetype, **parameters)
    except (OSError, ValueError) as e:
        raise CodecError(f"Failed to encode {filetype}: {e}") from e
    return output_stream.getvalue()


def decode(data: bytes) -> PixelBuffer:
    """
    Decodes compressed image data into an RGBA buffer.

    :param data: Encoded image bytes
    :return: The decoded pixels
    """
    try:
        with PIL.Image.open(io.BytesIO(data)) as image:
            image.load()
            return PixelBuffer.from_pil(image)
    except (OSError, ValueError, PIL.Image.DecompressionBombError) as e:
        raise CodecError(f"Failed to decode image: {e}") from e


def detect_mime_type(data: bytes) -> str:
    """Detect MIME type from magic bytes.

    :param data: Raw image bytes
    :returns: MIME type string
    """
    if len(data) < 12:
        return 'application/octet-stream'

    # JPEG: FF D8 FF
    if data[:3] == b'\xff\xd8\xff':
        return 'image/jpeg'
    # PNG: 89 50 4E 47 0D 0A 1A 0A
    if data[:4] == b'\x89PNG':
        return 'image/png'
    # WebP: RIFF....WEBP
    if data[:4] == b'RIFF' and data[8:12] == b'WEBP':
        return 'image/webp'
    # BMP: BM
    if data[:2] == b'BM':
        return 'image/bmp'
    # GIF: GIF87a or GIF89a
    if data[:3] == b'GIF':
        return 'image/gif'

    return 'application/octet-stream'


def to_data_url(data: bytes, mime_type: str | None = None) -> str:
    """Wrap encoded image bytes in a data URL.

    :param data: Encoded image bytes
    :param mime_type: MIME type, detected from the data if omitted
    :returns: Data URL string 'data:image/jpeg;base64,...'
    """
    if mime_type is None:
        mime_type = detect_mime_type(data)
    encoded = base64.b64encode(data).decode('ascii')
    return f'data:{mime_type};base64,{encoded}'


def from_data_url(data_url: str) -> tuple[bytes, str]:
    """Extract the bytes and MIME type from a data URL.

    :param data_url: Data URL like 'data:image/jpeg;base64,...'
    :returns: (bytes, mime_type) tuple
    """
    if not isinstance(data_url, str):
        raise CodecError(f"Invalid data URL - expected str, got {type(data_url).__name__}")
    if not data_url.startswith('data:'):
        raise CodecError("Invalid data URL format - must start with 'data:'")

    if ',' not in data_url:
        raise CodecError("Invalid data URL format - missing comma separator")

    # Parse: data:image/jpeg;base64,<encoded_data>
    header, encoded = data_url.split(',', 1)
    mime_part = header[5:]
    if ';' in mime_part:
        mime_type = mime_part.split(';')[0]
    else:
        mime_type = mime_part

    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CodecError(f"Invalid base64 payload in data URL: {e}") from e
    return data, mime_type or detect_mime_type(data)
