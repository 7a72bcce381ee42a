IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp")

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# Shortest signature (JPEG, BMP) is two bytes
MIN_SIGNATURE_LENGTH = 2


def is_image_filename(filename: str | None) -> bool:
    """True if the filename carries a known image extension (case-insensitive)."""
    if not filename:
        return False
    return filename.lower().endswith(IMAGE_EXTENSIONS)


def detect_format(data: bytes | None) -> str | None:
    """Name the image format whose magic bytes start `data`, or None."""
    if not data or len(data) < MIN_SIGNATURE_LENGTH:
        return None
    if data[:2] == b"\xff\xd8":
        return "jpeg"
    if data[:8] == PNG_SIGNATURE:
        return "png"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "gif"
    if data[:2] == b"BM":
        return "bmp"
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "webp"
    return None


def is_image_data(data: bytes | None) -> bool:
    return detect_format(data) is not None


def classify(data: bytes | None, filename: str | None) -> bool:
    """Cheap image check: either the filename or the magic bytes must agree.

    Never decodes, never raises.
    """
    return is_image_filename(filename) or is_image_data(data)
