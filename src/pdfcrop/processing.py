import logging
import math
from typing import Dict, Optional, Set, Tuple
from PIL import Image

from .config import Config
from .models.crop_box import CropBox


log = logging.getLogger(__name__)

RESAMPLING_KERNELS: Dict[str, Image.Resampling] = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,  # Catmull-Rom (a = -0.5)
    "lanczos": Image.Resampling.LANCZOS,
}


def _neighbours(exact: float, limit: int) -> Set[int]:
    low = min(max(math.floor(exact), 1), limit)
    high = min(max(math.ceil(exact), 1), limit)
    return {low, high}


def compute_crop_dimensions(width: int, height: int, ratio: float) -> Tuple[int, int]:
    """Largest (width, height) inside the source whose aspect is closest to ratio.

    Only one side is ever shortened. The new side length is whichever of the two
    integers around the exact value gives the smaller aspect error, so the crop
    never moves further from ``ratio`` than the source already is.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if ratio <= 0:
        raise ValueError(f"Aspect ratio must be positive, got {ratio}")

    if width / height > ratio:
        # Wider than target: keep height, trim width
        candidates = _neighbours(height * ratio, width)
        target_width = min(candidates, key=lambda w: (abs(w / height - ratio), -w))
        return target_width, height

    # Taller than (or equal to) target: keep width, trim height
    candidates = _neighbours(width / ratio, height)
    target_height = min(candidates, key=lambda h: (abs(width / h - ratio), -h))
    return width, target_height


def compute_crop_box(width: int, height: int, ratio: float) -> CropBox:
    """Center the crop from compute_crop_dimensions inside a width x height raster."""
    target_width, target_height = compute_crop_dimensions(width, height, ratio)

    x0 = max((width - target_width) // 2, 0)
    y0 = max((height - target_height) // 2, 0)
    x1 = min(x0 + target_width, width)
    y1 = min(y0 + target_height, height)

    return CropBox(x0=x0, y0=y0, x1=x1, y1=y1)


def crop_image(img: Image.Image, box: CropBox) -> Image.Image:
    """Copy the pixels inside box into a new image, without interpolation."""
    if not box.contains(img.width, img.height):
        raise ValueError(
            f"Crop box {box.as_tuple()} exceeds image dimensions {img.width}x{img.height}"
        )
    return img.crop(box.as_tuple())


def crop_to_aspect(img: Image.Image, ratio: float) -> Image.Image:
    box = compute_crop_box(img.width, img.height, ratio)
    log.debug(
        f"Cropping {img.width}x{img.height} to {box.width}x{box.height} at ({box.x0}, {box.y0})"
    )
    return crop_image(img, box)


def resize_image(
    img: Image.Image, target_width: int, target_height: int, kernel: str = "bicubic"
) -> Image.Image:
    """Resample img to exactly target_width x target_height."""
    if target_width <= 0 or target_height <= 0:
        raise ValueError(
            f"Target dimensions must be positive, got {target_width}x{target_height}"
        )
    try:
        resample = RESAMPLING_KERNELS[kernel]
    except KeyError:
        raise ValueError(
            f"Unknown resampling kernel {kernel!r}. "
            f"Choose one of: {', '.join(RESAMPLING_KERNELS)}"
        ) from None

    return img.resize((target_width, target_height), resample)


def prepare_page(img: Image.Image, config: Config) -> Image.Image:
    """Crop a rendered page to the configured aspect ratio and optionally resize it."""
    cropped = crop_to_aspect(img, config.ASPECT_RATIO)

    target_size: Optional[tuple] = config.target_size
    if target_size is None:
        return cropped

    target_width, target_height = target_size
    return resize_image(cropped, target_width, target_height, config.RESAMPLING_KERNEL)
