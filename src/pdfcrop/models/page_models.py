"""Data models for converted pages."""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass
class PageImage:
    """Represents a single page written to disk."""

    page_num: int
    path: Path
    dimensions: Tuple[int, int]
