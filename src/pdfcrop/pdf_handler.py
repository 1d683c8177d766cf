import logging
from pathlib import Path
from typing import List, Optional
from PIL import Image
from pdf2image import convert_from_path
from PyPDF2 import PdfReader

log = logging.getLogger(__name__)

PDF_SUFFIX = ".pdf"


def find_pdfs(directory: Path) -> List[Path]:
    """PDF files directly inside directory, sorted by name. Listing errors propagate."""
    return sorted(
        (
            entry
            for entry in directory.iterdir()
            if entry.is_file() and entry.suffix.lower() == PDF_SUFFIX
        ),
        key=lambda p: p.name,
    )


class PdfDocument:
    """An open PDF: page count from PyPDF2, page rasters from pdf2image."""

    def __init__(self, pdf_path: Path, dpi: int) -> None:
        self.pdf_path = pdf_path
        self.dpi = dpi
        self._reader: Optional[PdfReader] = PdfReader(str(pdf_path))

    def page_count(self) -> int:
        if self._reader is None:
            raise RuntimeError(f"{self.pdf_path} is closed")
        return len(self._reader.pages)

    def render_page(self, index: int) -> Image.Image:
        """Rasterize one zero-based page."""
        page_num = index + 1
        try:
            pages = convert_from_path(
                str(self.pdf_path), first_page=page_num, last_page=page_num, dpi=self.dpi
            )
        except Exception as e:
            raise RuntimeError(
                f"Failed to render page {page_num} of {self.pdf_path}"
            ) from e
        if not pages:
            raise RuntimeError(f"No image rendered for page {page_num} of {self.pdf_path}")
        return pages[0]

    def close(self) -> None:
        self._reader = None


def open_document(pdf_path: Path, dpi: int) -> PdfDocument:
    try:
        return PdfDocument(pdf_path, dpi)
    except Exception as e:
        raise RuntimeError(f"Failed to open PDF {pdf_path}") from e


def save_png(image: Image.Image, filepath: Path) -> None:
    """Encode image as PNG at filepath, replacing any existing file."""
    try:
        image.save(filepath, "PNG")
    except Exception as e:
        raise RuntimeError(f"Failed to save {filepath}") from e
