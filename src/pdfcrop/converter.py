"""ConversionJob: turns one PDF into a directory of cropped page PNGs."""

import logging
from contextlib import closing
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from .config import Config
from .models.callbacks import ConversionCallbacks
from .models.page_models import PageImage
from .page_selection import select_pages
from .pdf_handler import open_document, save_png
from .processing import prepare_page

log = logging.getLogger(__name__)

DocumentOpener = Callable[[Path, int], object]


class ConversionJob:
    """Encapsulates the per-file conversion state and error policy."""

    def __init__(
        self,
        pdf_path: Path,
        output_root: Path,
        config: Config,
        opener: Optional[DocumentOpener] = None,
        callbacks: Optional[ConversionCallbacks] = None,
    ) -> None:
        self.pdf_path = pdf_path
        self.output_dir = output_root / pdf_path.stem
        self.config = config
        self.opener = opener or open_document
        self.callbacks = callbacks or ConversionCallbacks()

    def _report_error(self, message: str, exc: Exception) -> None:
        log.error(f"{message}: {exc}", exc_info=log.isEnabledFor(logging.DEBUG))
        self.callbacks.on_error(self.pdf_path, f"{message}: {exc}")

    def convert_page(self, doc, index: int) -> PageImage:
        """Render, crop, resize and save one zero-based page."""
        rendered = doc.render_page(index)
        page = prepare_page(rendered, self.config)

        filepath = self.output_dir / self.config.page_filename(index)
        save_png(page, filepath)
        return PageImage(index + 1, filepath, (page.width, page.height))

    def run(self, requested_page: int = 0) -> List[PageImage]:
        """Convert the selected pages; failures are logged, never raised."""
        try:
            doc = self.opener(self.pdf_path, self.config.DPI)
        except Exception as e:
            self._report_error(f"Error processing {self.pdf_path.name}", e)
            return []

        written: List[PageImage] = []
        with closing(doc):
            try:
                self.output_dir.mkdir(parents=True, exist_ok=True)
                total_pages = doc.page_count()
            except Exception as e:
                self._report_error(f"Error processing {self.pdf_path.name}", e)
                return []

            pages = select_pages(requested_page, total_pages)
            if not pages:
                return []

            log.info(f"Converting {self.pdf_path.name} ({len(pages)} pages)")
            self.callbacks.on_file_start(self.pdf_path, len(pages))

            for index in pages:
                try:
                    page_image = self.convert_page(doc, index)
                except Exception as e:
                    self._report_error(
                        f"Error converting page {index + 1} of {self.pdf_path.name}", e
                    )
                    continue

                written.append(page_image)
                log.debug(f"Saved {page_image.path} {page_image.dimensions}")
                self.callbacks.on_page_saved(
                    self.pdf_path, page_image.page_num, page_image.path
                )

        return written


def process_files(
    pdf_files: Sequence[Path],
    requested_page: int,
    config: Config,
    output_root: Path,
    opener: Optional[DocumentOpener] = None,
    callbacks: Optional[ConversionCallbacks] = None,
) -> int:
    """Convert every file in order and return the number of pages written."""
    total_written = 0
    seen: Dict[Path, Path] = {}
    for pdf_path in pdf_files:
        job = ConversionJob(pdf_path, output_root, config, opener, callbacks)
        if job.output_dir in seen:
            log.warning(
                f"{pdf_path.name} and {seen[job.output_dir].name} share output directory "
                f"{job.output_dir}; pages of {pdf_path.name} may overwrite earlier ones"
            )
        else:
            seen[job.output_dir] = pdf_path
        total_written += len(job.run(requested_page))
    return total_written
