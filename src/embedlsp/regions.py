"""
The region model of composite documents, as produced by a region scanner.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from overrides import override

from embedlsp.embedded_language_config import RegionType
from embedlsp.text_document import TextDocument


@dataclass(frozen=True)
class EmbeddedRegion:
    """
    A contiguous span of a composite document written in a single embedded language.
    """

    language_id: str
    start: int
    """start offset (inclusive) in the composite document"""
    end: int
    """end offset (exclusive) in the composite document"""
    type: RegionType
    attribute_value: bool = False
    """whether the span is an attribute value inside a markup region rather than a top-level block"""

    def contains(self, offset: int) -> bool:
        """
        :param offset: an offset in the composite document
        :return: whether the offset lies within the region, both boundaries included
        """
        return self.start <= offset <= self.end


@dataclass(frozen=True)
class ScanResult:
    """
    The result of scanning a composite document.

    The regions are ordered by start offset and do not overlap; offsets not covered by any region belong
    to the host language.
    """

    regions: tuple[EmbeddedRegion, ...] = ()
    imported_scripts: tuple[str, ...] = ()
    """references (e.g. paths) of scripts which a script block imports instead of declaring inline content"""

    @classmethod
    def of(cls, regions: Iterable[EmbeddedRegion], imported_scripts: Iterable[str] = ()) -> ScanResult:
        return cls(tuple(regions), tuple(imported_scripts))


class RegionScanner(ABC):
    """
    Decomposes a composite document into embedded regions.

    Implementations must resolve block-level language attributes (e.g. `lang="scss"`) to concrete language ids
    and must return regions in non-decreasing start order without overlaps.
    """

    @abstractmethod
    def scan(self, document: TextDocument) -> ScanResult:
        pass


class FunctionRegionScanner(RegionScanner):
    """Adapts a plain scanning function to the `RegionScanner` interface."""

    def __init__(self, scan_fn: Callable[[TextDocument], ScanResult]) -> None:
        self._scan_fn = scan_fn

    @override
    def scan(self, document: TextDocument) -> ScanResult:
        return self._scan_fn(document)
