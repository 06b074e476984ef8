"""
Projection of composite documents onto their embedded languages.

Given a composite document and the regions a scanner found in it, the functions in this module classify
positions and ranges by language and build virtual documents: same-length copies of the composite document
in which all content not belonging to a selected language (or region type) is replaced by whitespace, such
that positions in the virtual document coincide with positions in the composite document.
"""

import logging
import re
from collections.abc import Callable, Sequence
from typing import Any

from sensai.util.string import ToStringMixin

from embedlsp.embedded_language_config import EmbeddedLanguageConfig, LanguageId, RegionType
from embedlsp.ls_types import LanguageRange, Position, Range
from embedlsp.regions import EmbeddedRegion, RegionScanner, ScanResult
from embedlsp.text_document import TextDocument

log = logging.getLogger(__name__)

# matches every character except line terminators
_MASKED_CHAR_PATTERN = re.compile(r"[^\n\r\u2028\u2029]")


def _language_range(start: Position, end: Position, language_id: str, attribute_value: bool = False) -> LanguageRange:
    result = LanguageRange(start=start, end=end, languageId=language_id)
    if attribute_value:
        result["attributeValue"] = True
    return result


def get_language_ranges(
    document: TextDocument,
    regions: Sequence[EmbeddedRegion],
    range: Range | None = None,
    host_language_id: str = LanguageId.VUE,
) -> list[LanguageRange]:
    """
    Partitions a range of the composite document into language ranges.

    The resulting ranges are ordered, contiguous and non-overlapping and cover the query range exactly;
    content not covered by any region is attributed to the host language.

    :param document: the composite document
    :param regions: the regions of the document
    :param range: the range to partition; if None, the whole document
    :param host_language_id: the language of content not covered by any region
    :return: the language ranges
    """
    result: list[LanguageRange] = []
    current_pos = range["start"] if range else document.position_at(0)
    current_offset = document.offset_at(range["start"]) if range else 0
    end_offset = document.offset_at(range["end"]) if range else len(document)
    for region in regions:
        if region.end > current_offset and region.start < end_offset:
            start = max(region.start, current_offset)
            start_pos = document.position_at(start)
            if current_offset < region.start:
                result.append(_language_range(current_pos, start_pos, host_language_id))
            end = min(region.end, end_offset)
            end_pos = document.position_at(end)
            if end > region.start:
                result.append(_language_range(start_pos, end_pos, region.language_id, region.attribute_value))
            current_offset = end
            current_pos = end_pos
    if current_offset < end_offset:
        end_pos = range["end"] if range else document.position_at(end_offset)
        result.append(_language_range(current_pos, end_pos, host_language_id))
    return result


def get_language_at_position(
    document: TextDocument,
    regions: Sequence[EmbeddedRegion],
    position: Position,
    host_language_id: str = LanguageId.VUE,
) -> str:
    """
    Determines the language at the given position.

    Region boundaries are inclusive, so a position at the boundary of two adjacent regions
    belongs to the earlier region.

    :param document: the composite document
    :param regions: the regions of the document
    :param position: the position
    :param host_language_id: the language of content not covered by any region
    :return: the language id of the first region containing the position, or the host language
    """
    offset = document.offset_at(position)
    for region in regions:
        if region.start > offset:
            break
        if offset <= region.end:
            return region.language_id
    return host_language_id


def get_languages_in_document(regions: Sequence[EmbeddedRegion], host_language_id: str = LanguageId.VUE) -> list[str]:
    """
    :param regions: the regions of a composite document
    :param host_language_id: the host language
    :return: the host language followed by the distinct language ids of the regions in order of first occurrence
    """
    result = [host_language_id]
    for region in regions:
        if region.language_id and region.language_id not in result:
            result.append(region.language_id)
    return result


def _project(
    document: TextDocument, regions: Sequence[EmbeddedRegion], is_selected: Callable[[EmbeddedRegion], bool], language_id: str
) -> TextDocument:
    old_content = document.get_text()
    new_content = list(_MASKED_CHAR_PATTERN.sub(" ", old_content))
    for region in regions:
        if is_selected(region):
            new_content[region.start : region.end] = old_content[region.start : region.end]
    return TextDocument.create(document.uri, language_id, document.version, "".join(new_content))


def get_single_language_document(document: TextDocument, regions: Sequence[EmbeddedRegion], language_id: str) -> TextDocument:
    """
    Gets a document in which all regions of the given language are preserved,
    whereas all other content is replaced with whitespace.
    """
    return _project(document, regions, lambda r: r.language_id == language_id, language_id)


def get_single_type_document(
    document: TextDocument,
    regions: Sequence[EmbeddedRegion],
    region_type: RegionType,
    config: EmbeddedLanguageConfig | None = None,
) -> TextDocument:
    """
    Gets a document in which all regions of the given type are preserved,
    whereas all other content is replaced with whitespace.

    The resulting document declares the default language of the type, regardless of the regions' dialects.
    """
    config = config or EmbeddedLanguageConfig()
    return _project(document, regions, lambda r: r.type == region_type, config.default_language_for(region_type))


def get_language_range_by_type(
    document: TextDocument, regions: Sequence[EmbeddedRegion], region_type: RegionType
) -> LanguageRange | None:
    """
    :return: the range of the first region of the given type, tagged with the region's language, or None if
        there is no such region. Use `get_language_ranges_by_type` to obtain the ranges of all such regions.
    """
    for region in regions:
        if region.type == region_type:
            return _language_range(
                document.position_at(region.start), document.position_at(region.end), region.language_id, region.attribute_value
            )
    return None


def get_language_ranges_by_type(
    document: TextDocument, regions: Sequence[EmbeddedRegion], region_type: RegionType
) -> list[LanguageRange]:
    """
    :return: the ranges of all regions of the given type in document order, each tagged with the region's language
    """
    return [
        _language_range(document.position_at(r.start), document.position_at(r.end), r.language_id, r.attribute_value)
        for r in regions
        if r.type == region_type
    ]


class EmbeddedDocumentRegions(ToStringMixin):
    """
    Provides language-aware views of a composite document based on a single scan of the document.

    Instances are immutable and must be recreated whenever the document's content changes.
    """

    def __init__(self, document: TextDocument, scan_result: ScanResult, config: EmbeddedLanguageConfig | None = None) -> None:
        self._document = document
        self._regions = scan_result.regions
        self._imported_scripts = scan_result.imported_scripts
        self._config = config or EmbeddedLanguageConfig()

    def _tostring_includes(self) -> list[str]:
        return ["_config"]

    def _tostring_additional_entries(self) -> dict[str, Any]:
        return {"uri": self._document.uri, "version": self._document.version, "num_regions": len(self._regions)}

    @property
    def document(self) -> TextDocument:
        return self._document

    @property
    def regions(self) -> tuple[EmbeddedRegion, ...]:
        return self._regions

    @property
    def host_language_id(self) -> str:
        return self._config.host_language_id

    def get_single_language_document(self, language_id: str) -> TextDocument:
        return get_single_language_document(self._document, self._regions, language_id)

    def get_single_type_document(self, region_type: RegionType) -> TextDocument:
        return get_single_type_document(self._document, self._regions, region_type, self._config)

    def get_language_range_by_type(self, region_type: RegionType) -> LanguageRange | None:
        return get_language_range_by_type(self._document, self._regions, region_type)

    def get_language_ranges_by_type(self, region_type: RegionType) -> list[LanguageRange]:
        return get_language_ranges_by_type(self._document, self._regions, region_type)

    def get_language_ranges(self, range: Range | None = None) -> list[LanguageRange]:
        return get_language_ranges(self._document, self._regions, range, self.host_language_id)

    def get_language_at_position(self, position: Position) -> str:
        return get_language_at_position(self._document, self._regions, position, self.host_language_id)

    def get_languages_in_document(self) -> list[str]:
        return get_languages_in_document(self._regions, self.host_language_id)

    def get_imported_scripts(self) -> list[str]:
        return list(self._imported_scripts)


def get_document_regions(
    document: TextDocument, scanner: RegionScanner, config: EmbeddedLanguageConfig | None = None
) -> EmbeddedDocumentRegions:
    """
    Scans the given composite document and creates the projector for it.

    :param document: the composite document
    :param scanner: the scanner with which to determine the document's regions
    :param config: the language configuration; if None, the default (Vue) configuration is used
    :return: the projector
    """
    scan_result = scanner.scan(document)
    log.debug(f"Scanned {document.uri} (version {document.version}): {len(scan_result.regions)} regions")
    return EmbeddedDocumentRegions(document, scan_result, config)
