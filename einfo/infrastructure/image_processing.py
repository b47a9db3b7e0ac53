"""Image Processing: decode, resize and re-encode uploaded images as JPEG.

Invariants:
    - Output is always RGB JPEG; transparency is flattened onto white
    - "cover" crops to exactly width x height around the center
    - "inside" fits within width x height and never enlarges
    - Bytes Pillow cannot decode raise UploadRejectedError
    - Images over MAX_IMAGE_PIXELS are rejected from the header, before decoding
"""

import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from einfo.core.errors import UploadRejectedError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({
    "image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif",
})


@dataclass(frozen=True)
class ImageSpec:
    width: int
    height: int
    fit: str  # "cover" | "inside"
    quality: int


# Checked against the header, before any pixel data is decoded
MAX_IMAGE_PIXELS = 25_000_000

PROFILE_IMAGE = ImageSpec(400, 400, "cover", 85)
PORTFOLIO_IMAGE = ImageSpec(800, 600, "inside", 90)
EDUCATION_IMAGE = ImageSpec(200, 200, "cover", 85)


def _flatten(img: Image.Image) -> Image.Image:
    img = img.convert("RGBA")
    background = Image.new("RGBA", img.size, (255, 255, 255, 255))
    return Image.alpha_composite(background, img).convert("RGB")


def process_image(data: bytes, spec: ImageSpec) -> bytes:
    """Resize per spec and return JPEG bytes."""
    try:
        with Image.open(io.BytesIO(data)) as src:
            width, height = src.size
            if width * height > MAX_IMAGE_PIXELS:
                logger.info(f"Oversized image upload: {width}x{height}")
                raise UploadRejectedError("Image dimensions are too large")
            if src.format == "JPEG":
                side = max(spec.width, spec.height)
                src.draft(src.mode, (side, side))
            src.seek(0)
            img = _flatten(ImageOps.exif_transpose(src))
    except Image.DecompressionBombError as e:
        logger.info(f"Oversized image upload: {e}")
        raise UploadRejectedError("Image dimensions are too large")
    except (UnidentifiedImageError, OSError) as e:
        logger.info(f"Undecodable image upload: {e}")
        raise UploadRejectedError("Invalid image file")

    if spec.fit == "cover":
        img = ImageOps.fit(
            img, (spec.width, spec.height),
            method=Image.LANCZOS, centering=(0.5, 0.5),
        )
    else:
        img.thumbnail((spec.width, spec.height), Image.LANCZOS)

    out = io.BytesIO()
    img.save(out, format="JPEG", quality=spec.quality, optimize=True)
    return out.getvalue()
