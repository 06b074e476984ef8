"""
Language and region type vocabulary for composite documents.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType


class LanguageId(StrEnum):
    """
    Known language ids of composite documents and their embedded regions.

    Language ids are passed around as plain strings, so scanners may report dialects not listed here.
    """

    VUE = "vue"
    """The host language, i.e. the language of content not claimed by any embedded region"""
    VUE_HTML = "vue-html"
    PUG = "pug"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    CSS = "css"
    POSTCSS = "postcss"
    SCSS = "scss"
    LESS = "less"
    STYLUS = "stylus"
    CUSTOM = "custom"
    """Generic id of custom blocks"""


class RegionType(StrEnum):
    """The structural role of an embedded region, independent of its language dialect."""

    TEMPLATE = "template"
    SCRIPT = "script"
    STYLE = "style"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, name: str) -> RegionType:
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown region type '{name}'; valid types: {[t.value for t in cls]}") from None


DEFAULT_LANGUAGE_BY_TYPE: Mapping[RegionType, str] = MappingProxyType(
    {
        RegionType.TEMPLATE: LanguageId.VUE_HTML,
        RegionType.SCRIPT: LanguageId.JAVASCRIPT,
        RegionType.STYLE: LanguageId.CSS,
        RegionType.CUSTOM: LanguageId.CUSTOM,
    }
)


@dataclass(frozen=True)
class EmbeddedLanguageConfig:
    """
    Language configuration of a projector.

    Specifies the host language of composite documents and the language declared by virtual documents
    which are projected by region type.
    """

    host_language_id: str = LanguageId.VUE
    default_languages: Mapping[RegionType, str] = field(default_factory=lambda: DEFAULT_LANGUAGE_BY_TYPE, hash=False)
    """read-only after construction; not part of the hash"""

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_languages", MappingProxyType(dict(self.default_languages)))

    def default_language_for(self, region_type: RegionType) -> str:
        """
        :param region_type: the region type
        :return: the configured default language of the type, falling back to the built-in default
        """
        language_id = self.default_languages.get(region_type)
        if language_id is None:
            language_id = DEFAULT_LANGUAGE_BY_TYPE[region_type]
        return language_id
