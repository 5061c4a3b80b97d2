"""Document kind detection for incoming files."""

import mimetypes
from typing import Optional

from document_qa.exceptions import UnsupportedTypeError
from document_qa.logger import get_logger
from document_qa.models import DocumentKind

logger = get_logger(__name__)


PDF_SIGNATURE = b"%PDF"
PDF_MIME_TYPE = "application/pdf"

# Declared types read as text even though they are not text/*
TEXTUAL_MIME_TYPES = {
    "application/json",
    "application/xml",
    "application/csv",
    "application/x-yaml",
}


class DocumentDetector:
    """Decides whether a file is read as plain text or as a paged document."""

    def detect(self, file_bytes: bytes, mime_type: Optional[str], file_name: str) -> DocumentKind:
        declared = (mime_type or "").split(";")[0].strip().lower()

        if file_bytes.startswith(PDF_SIGNATURE):
            kind = DocumentKind.PAGED_BINARY
            source = "signature"
        else:
            if not declared:
                guessed, _ = mimetypes.guess_type(file_name)
                declared = guessed or ""
            kind = self._kind_for_mime(declared, file_name)
            source = "mime_type" if declared else "default"

        logger.debug(
            "Document kind detected",
            extra_data={
                "file_name": file_name,
                "declared_mime_type": mime_type,
                "kind": kind.value,
                "source": source,
                "file_size_bytes": len(file_bytes),
            },
        )
        return kind

    @staticmethod
    def _kind_for_mime(mime_type: str, file_name: str) -> DocumentKind:
        if mime_type == PDF_MIME_TYPE:
            return DocumentKind.PAGED_BINARY
        if not mime_type or mime_type.startswith("text/") or mime_type in TEXTUAL_MIME_TYPES:
            return DocumentKind.PLAIN_TEXT

        logger.warning(
            "Unsupported MIME type detected",
            extra_data={"file_name": file_name, "mime_type": mime_type},
        )
        raise UnsupportedTypeError(f"Unsupported mime type: {mime_type}")
