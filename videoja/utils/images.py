"""
Reference image decoding and verification.

The browser used to hand over files as `data:<mime>;base64,<payload>` URLs.
Both that form and a bare base64 payload are accepted here; the bytes are
opened with Pillow so a declared media type can't lie about the content.
"""

import base64
import binascii
import io
import re

from PIL import Image, UnidentifiedImageError

from videoja.errors import InvalidReferenceImageError

# Only the first-frame formats Veo accepts, not every image/*
ALLOWED_MEDIA_TYPES = {"image/png", "image/jpeg", "image/webp"}

_MEDIA_TYPE_ALIASES = {"image/jpg": "image/jpeg", "image/pjpeg": "image/jpeg"}
_DATA_URL_RE = re.compile(r"^data:(?P<mime>[^;,]+);base64,(?P<data>.+)$", re.DOTALL)


def normalize_media_type(media_type: str) -> str:
    media_type = media_type.strip().lower()
    return _MEDIA_TYPE_ALIASES.get(media_type, media_type)


def split_data_url(value: str) -> tuple[str, str] | None:
    """Return (media_type, base64_payload) for a data URL, None for anything else."""
    match = _DATA_URL_RE.match(value.strip())
    if not match:
        return None
    return match.group("mime"), match.group("data")


def decode_base64(payload: str) -> bytes:
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidReferenceImageError(f"Reference image is not valid base64: {e}")


def sniff_media_type(data: bytes) -> str:
    """Open the bytes with Pillow and return the media type of the decoded format."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            mime = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidReferenceImageError(f"Reference image could not be decoded: {e}")

    if not mime:
        raise InvalidReferenceImageError("Reference image format is not recognised")
    return normalize_media_type(mime)


def verify_reference_image(data: bytes, media_type: str, max_bytes: int) -> str:
    """
    Check size, decodability and declared type of a reference image.

    Returns the normalised media type.
    """
    if not data:
        raise InvalidReferenceImageError("Reference image is empty")
    if len(data) > max_bytes:
        raise InvalidReferenceImageError(
            f"Image too large. Please use an image under {max_bytes // (1024 * 1024)}MB.",
            {"size": len(data), "max_bytes": max_bytes},
        )

    declared = normalize_media_type(media_type)
    if declared not in ALLOWED_MEDIA_TYPES:
        raise InvalidReferenceImageError(
            f"Unsupported image type '{media_type}'",
            {"allowed": sorted(ALLOWED_MEDIA_TYPES)},
        )

    actual = sniff_media_type(data)
    if actual != declared:
        raise InvalidReferenceImageError(
            f"Declared media type '{declared}' does not match image content '{actual}'",
            {"declared": declared, "actual": actual},
        )
    return declared
