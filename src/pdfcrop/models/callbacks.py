"""Callback definitions for conversion progress reporting."""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable


def _ignore(*args) -> None:
    return None


@dataclass
class ConversionCallbacks:
    """Callbacks that the converter will call to report progress"""

    on_file_start: Callable[[Path, int], None] = _ignore
    on_page_saved: Callable[[Path, int, Path], None] = _ignore
    on_error: Callable[[Path, str], None] = _ignore
