"""Configuration for the PDF crop converter."""

import json
import os
from pathlib import Path
from typing import Any, Optional

DEFAULT_CONFIG_FILE_PATH = Path.home() / ".config" / "pdfcrop" / "pdfcrop.json"

RESAMPLING_KERNEL_NAMES = ("nearest", "bilinear", "bicubic", "lanczos")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return _parse_int(name, raw)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return _parse_bool(name, raw)


def _coerce(name: str, value: Any, current: Any) -> Any:
    """Convert a JSON value to the type of the attribute it replaces."""
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return _parse_bool(name, value)
    elif isinstance(current, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            return _parse_int(name, value)
    elif isinstance(current, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif isinstance(current, str):
        if isinstance(value, str):
            return value
    raise ValueError(
        f"{name} must be of type {type(current).__name__}, got {value!r}"
    )


class Config:
    """Conversion settings, built once in main and passed down explicitly."""

    def __init__(self) -> None:
        # Rendering Configuration
        self.DPI: int = _env_int("PDFCROP_DPI", 150)

        # Geometry Configuration
        self.ASPECT_RATIO: float = 4.0 / 3.0
        self.TARGET_WIDTH: int = _env_int("PDFCROP_TARGET_WIDTH", 1440)
        self.TARGET_HEIGHT: int = _env_int("PDFCROP_TARGET_HEIGHT", 1080)
        self.RESIZE: bool = _env_bool("PDFCROP_RESIZE", True)
        self.RESAMPLING_KERNEL: str = os.environ.get("PDFCROP_KERNEL", "bicubic")

        # Output Configuration
        self.PAGE_IMAGE_PATTERN = "page_{:03d}.png"

    @property
    def target_size(self) -> Optional[tuple]:
        """Final (width, height), or None when pages keep their cropped size."""
        if not self.RESIZE:
            return None
        return self.TARGET_WIDTH, self.TARGET_HEIGHT

    def page_filename(self, index: int) -> str:
        """File name for a zero-based page index."""
        return self.PAGE_IMAGE_PATTERN.format(index + 1)

    def validate(self) -> None:
        """Raise ValueError for settings that would make every page fail."""
        for key in ("DPI", "TARGET_WIDTH", "TARGET_HEIGHT"):
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{key} must be a positive integer, got {value!r}")

        if not isinstance(self.RESIZE, bool):
            raise ValueError(f"RESIZE must be a boolean, got {self.RESIZE!r}")

        if self.RESAMPLING_KERNEL not in RESAMPLING_KERNEL_NAMES:
            raise ValueError(
                f"RESAMPLING_KERNEL must be one of {', '.join(RESAMPLING_KERNEL_NAMES)}, "
                f"got {self.RESAMPLING_KERNEL!r}"
            )

        if (
            isinstance(self.ASPECT_RATIO, bool)
            or not isinstance(self.ASPECT_RATIO, (int, float))
            or self.ASPECT_RATIO <= 0
        ):
            raise ValueError(
                f"ASPECT_RATIO must be a positive number, got {self.ASPECT_RATIO!r}"
            )

    def save(self, path: Path = DEFAULT_CONFIG_FILE_PATH) -> None:
        """Save configuration to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {}
        for key, value in vars(self).items():
            if key.startswith("_"):
                continue
            data[key] = value

        with open(path, "w") as f:
            json.dump(data, f, indent=2)

    def load(self, path: Path = DEFAULT_CONFIG_FILE_PATH) -> None:
        """Load configuration from JSON file. Unknown keys are ignored."""
        if not path.exists():
            return

        with open(path, "r") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(
                f"{path} must contain a JSON object, got {type(data).__name__}"
            )

        for key, value in data.items():
            if hasattr(self, key) and not key.startswith("_"):
                setattr(self, key, _coerce(key, value, getattr(self, key)))
