"""Shared fixtures: an in-memory stand-in for a rendered PDF."""

from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pytest
from PIL import Image, ImageDraw

from pdfcrop.config import Config


class FakeDocument:
    """Implements the page_count / render_page / close capability without poppler."""

    def __init__(
        self,
        page_sizes: List[Tuple[int, int]],
        failing_pages: Optional[Set[int]] = None,
    ) -> None:
        self.page_sizes = page_sizes
        self.failing_pages = failing_pages or set()
        self.rendered: List[int] = []
        self.closed = False

    def page_count(self) -> int:
        return len(self.page_sizes)

    def render_page(self, index: int) -> Image.Image:
        if index in self.failing_pages:
            raise RuntimeError(f"render failed for page {index + 1}")
        self.rendered.append(index)
        width, height = self.page_sizes[index]
        img = Image.new("RGBA", (width, height), color=(255, 255, 255, 255))
        draw = ImageDraw.Draw(img)
        draw.rectangle(
            (width // 4, height // 4, 3 * width // 4, 3 * height // 4),
            fill=(20, 40, 200, 255),
        )
        return img

    def close(self) -> None:
        self.closed = True


class FakeOpener:
    """Maps file names to FakeDocuments; unknown names fail to open."""

    def __init__(self, documents: Dict[str, FakeDocument]) -> None:
        self.documents = documents
        self.opened: List[str] = []

    def __call__(self, pdf_path: Path, dpi: int) -> FakeDocument:
        self.opened.append(pdf_path.name)
        if pdf_path.name not in self.documents:
            raise RuntimeError(f"Failed to open PDF {pdf_path}")
        return self.documents[pdf_path.name]


@pytest.fixture
def config(monkeypatch):
    for name in (
        "PDFCROP_DPI",
        "PDFCROP_TARGET_WIDTH",
        "PDFCROP_TARGET_HEIGHT",
        "PDFCROP_RESIZE",
        "PDFCROP_KERNEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return Config()
