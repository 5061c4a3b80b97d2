"""PyMuPDF-based text extractor with optional Tesseract OCR fallback."""

import asyncio
import codecs
import io
import os
from typing import Optional

import fitz  # PyMuPDF
import pytesseract
from PIL import Image

from document_qa.config import ExtractorConfig
from document_qa.exceptions import DecodingError, ExtractionError
from document_qa.logger import Timer, get_logger
from document_qa.models import Document, DocumentKind, ExtractedText

logger = get_logger(__name__)


class TextExtractor:
    """Converts a document into plain text.

    Plain text documents are decoded as-is. Paged documents are read page by
    page with PyMuPDF: the words of each page are joined by a single space and
    every page ends with a newline. A failure on any page fails the whole
    document.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()

        ocr = self.config.ocr_config
        if ocr.enabled:
            if ocr.tesseract_cmd:
                pytesseract.pytesseract.tesseract_cmd = ocr.tesseract_cmd
            if ocr.tessdata_prefix:
                os.environ["TESSDATA_PREFIX"] = ocr.tessdata_prefix

    def extract(self, document: Document) -> ExtractedText:
        """Extract text from a document.

        Raises:
            DecodingError: If a plain text document is not valid in the configured encoding
            ExtractionError: If a paged document or one of its pages cannot be read
        """
        with Timer("extraction") as timer:
            if document.kind is DocumentKind.PAGED_BINARY:
                text = self._extract_paged(document)
            else:
                text = self._extract_plain(document)

        logger.info(
            "Extracted text from document",
            extra_data={
                "file_name": document.name,
                "kind": document.kind.value,
                "character_count": len(text),
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return ExtractedText(document=document, text=text)

    async def extract_async(self, document: Document) -> ExtractedText:
        """Run :meth:`extract` in a worker thread."""
        return await asyncio.to_thread(self.extract, document)

    def _extract_plain(self, document: Document) -> str:
        try:
            encoding = codecs.lookup(self.config.text_encoding).name
            # A leading UTF-8 byte order mark is not part of the text
            if encoding == "utf-8":
                encoding = "utf-8-sig"
            return document.raw_bytes.decode(encoding)
        except (LookupError, UnicodeDecodeError) as exc:
            logger.error(
                "Failed to decode plain text document",
                extra_data={
                    "file_name": document.name,
                    "encoding": self.config.text_encoding,
                    "file_size_bytes": len(document.raw_bytes),
                },
            )
            raise DecodingError(
                f"Unable to decode {document.name} as {self.config.text_encoding}"
            ) from exc

    def _extract_paged(self, document: Document) -> str:
        try:
            pdf = fitz.open(stream=document.raw_bytes, filetype="pdf")
        except Exception as exc:
            logger.error(
                "Failed to open paged document",
                extra_data={"file_name": document.name, "error": str(exc)},
            )
            raise ExtractionError(f"Failed to open {document.name}: {exc}") from exc

        pages = []
        with pdf:
            for page_number in range(1, pdf.page_count + 1):
                try:
                    words = self._page_words(pdf[page_number - 1])
                except Exception as exc:
                    logger.error(
                        "Failed to read page",
                        extra_data={
                            "file_name": document.name,
                            "page_number": page_number,
                            "error_type": type(exc).__name__,
                            "error": str(exc),
                        },
                    )
                    raise ExtractionError(
                        f"Failed to read page {page_number} of {document.name}: {exc}"
                    ) from exc
                pages.append(" ".join(words) + "\n")

            logger.debug(
                "Paged document read",
                extra_data={"file_name": document.name, "page_count": pdf.page_count},
            )

        return "".join(pages)

    def _page_words(self, page: fitz.Page) -> list[str]:
        words = [word[4] for word in page.get_text("words")]
        if words or not self.config.ocr_config.enabled:
            return words

        logger.info(
            "Page has no text layer, running OCR",
            extra_data={"page_number": page.number + 1},
        )
        return self._ocr_page(page).split()

    def _ocr_page(self, page: fitz.Page) -> str:
        ocr = self.config.ocr_config
        pix = page.get_pixmap(dpi=ocr.dpi)
        image = Image.open(io.BytesIO(pix.tobytes("png")))

        tesseract_config = f"--psm {ocr.psm_mode}"
        if ocr.use_oem_1:
            tesseract_config += " --oem 1"

        with Timer("page_ocr") as timer:
            text = pytesseract.image_to_string(image, lang=ocr.languages, config=tesseract_config)

        logger.debug(
            "OCR completed for page",
            extra_data={
                "page_number": page.number + 1,
                "characters_extracted": len(text.strip()),
                "ocr_time_ms": timer.get_elapsed_ms(),
            },
        )
        return text
