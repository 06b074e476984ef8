from .document_regions import EmbeddedDocumentRegions, get_document_regions
from .document_regions_cache import DocumentRegionsCache
from .embedded_language_config import EmbeddedLanguageConfig, LanguageId, RegionType
from .ls_exceptions import EmbeddedLSPException, InvalidSettingsError
from .ls_types import LanguageRange, Position, Range
from .regions import EmbeddedRegion, FunctionRegionScanner, RegionScanner, ScanResult
from .settings import EmbeddedLSPSettings
from .text_document import TextDocument

__all__ = [
    "DocumentRegionsCache",
    "EmbeddedDocumentRegions",
    "EmbeddedLSPException",
    "EmbeddedLSPSettings",
    "EmbeddedLanguageConfig",
    "EmbeddedRegion",
    "FunctionRegionScanner",
    "InvalidSettingsError",
    "LanguageId",
    "LanguageRange",
    "Position",
    "Range",
    "RegionScanner",
    "RegionType",
    "ScanResult",
    "TextDocument",
    "get_document_regions",
]
