"""Image format detection from magic numbers."""

from tokenimage.models.token import ImageFormat

# Checked in order, first match wins
_SIGNATURES: tuple[tuple[bytes, ImageFormat], ...] = (
    (b"\xff\xd8", ImageFormat.JPEG),
    (b"\x89PNG", ImageFormat.PNG),
    (b"GIF", ImageFormat.GIF),
    (b"BM", ImageFormat.BMP),
)


def detect_image_format(data: bytes) -> ImageFormat:
    """Detect image format from the leading bytes.

    Args:
        data: Raw image bytes.

    Returns:
        Matching ImageFormat, or ImageFormat.UNKNOWN if no signature matches.
    """
    for signature, image_format in _SIGNATURES:
        if data.startswith(signature):
            return image_format
    return ImageFormat.UNKNOWN
