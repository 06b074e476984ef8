import re
from collections.abc import Callable

import pytest

from embedlsp import EmbeddedRegion, FunctionRegionScanner, LanguageId, RegionScanner, RegionType, ScanResult, TextDocument

_BLOCK_PATTERN = re.compile(r"<(template|script|style)(\s[^>]*)?>(.*?)</\1>", re.DOTALL)
_LANG_ATTR_PATTERN = re.compile(r"""\blang=["']([\w-]+)["']""")
_SRC_ATTR_PATTERN = re.compile(r"""\bsrc=["']([^"']+)["']""")

_LANG_ALIASES = {"ts": LanguageId.TYPESCRIPT, "js": LanguageId.JAVASCRIPT, "html": LanguageId.VUE_HTML}
_DEFAULT_LANGUAGES = {
    RegionType.TEMPLATE: LanguageId.VUE_HTML,
    RegionType.SCRIPT: LanguageId.JAVASCRIPT,
    RegionType.STYLE: LanguageId.CSS,
}


def scan_sfc(document: TextDocument) -> ScanResult:
    """
    Simplistic scanner for single-file components, which finds top-level template, script and style blocks.
    """
    regions = []
    imported_scripts = []
    for match in _BLOCK_PATTERN.finditer(document.get_text()):
        region_type = RegionType(match.group(1))
        attrs = match.group(2) or ""
        language_id: str = _DEFAULT_LANGUAGES[region_type]
        lang_match = _LANG_ATTR_PATTERN.search(attrs)
        if lang_match:
            lang = lang_match.group(1).lower()
            language_id = _LANG_ALIASES.get(lang, lang)
        if region_type == RegionType.SCRIPT:
            src_match = _SRC_ATTR_PATTERN.search(attrs)
            if src_match:
                imported_scripts.append(src_match.group(1))
        regions.append(EmbeddedRegion(language_id, match.start(3), match.end(3), region_type))
    return ScanResult.of(regions, imported_scripts)


@pytest.fixture
def sfc_scanner() -> RegionScanner:
    return FunctionRegionScanner(scan_sfc)


@pytest.fixture
def make_document() -> Callable[..., TextDocument]:
    def make(text: str, uri: str = "file:///project/src/App.vue", version: int = 1) -> TextDocument:
        return TextDocument.create(uri, LanguageId.VUE, version, text)

    return make
