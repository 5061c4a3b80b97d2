"""Configuration classes for document-qa."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class OCRConfig:
    """Configuration for the OCR fallback on pages without a text layer.

    OCR is off by default, so PDF text comes only from the embedded text layer.

    Examples:
        >>> # Read scanned pages with Tesseract
        >>> config = OCRConfig(enabled=True)

        >>> # Higher quality rendering for small print
        >>> config = OCRConfig(enabled=True, dpi=300, languages="eng+deu")
    """

    enabled: bool = False
    """Run Tesseract on pages that yield no text items."""

    tesseract_cmd: str = "tesseract"
    """Path to tesseract binary. Default: "tesseract" (assumes in PATH)."""

    tessdata_prefix: Optional[str] = None
    """Optional path to tessdata directory. If None, uses system default."""

    languages: str = "eng"
    """OCR languages in Tesseract format (e.g., "eng", "eng+fra")."""

    dpi: int = 150
    """Image DPI for page rendering. Higher = better quality but slower and more memory.

    Recommended values:
    - 120: Fastest, lowest memory, acceptable quality
    - 150: Default, balanced speed/quality/memory
    - 300: Best quality, ~2x memory
    """

    psm_mode: int = 6
    """Page segmentation mode (0-13). Default: 6 (uniform block of text)."""

    use_oem_1: bool = True
    """Use Tesseract OEM 1 (LSTM engine only)."""


@dataclass
class ExtractorConfig:
    """Configuration for document text extraction."""

    ocr_config: OCRConfig = field(default_factory=OCRConfig)
    text_encoding: str = "utf-8"


@dataclass
class CompletionConfig:
    """Configuration for the chat-completion service.

    Examples:
        >>> config = CompletionConfig(model="gpt-4o-mini", timeout_seconds=30)
    """

    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4"
    timeout_seconds: float = 120.0
    """Read timeout for a single completion."""

    connect_timeout_seconds: float = 10.0
    temperature: Optional[float] = None
    """Sampling temperature. None leaves the service default."""


@dataclass
class RunConfig:
    """Configuration for a question-answering run."""

    max_concurrency: int = 16
    """Upper bound on extraction and completion tasks in flight at once."""

    completion: CompletionConfig = field(default_factory=CompletionConfig)
    extractor: ExtractorConfig = field(default_factory=ExtractorConfig)

    def __post_init__(self) -> None:
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
