"""
Defines settings for embedlsp
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

from ruamel.yaml import YAML
from sensai.util import logging
from sensai.util.logging import LogTime
from sensai.util.string import ToStringMixin

from embedlsp.document_regions_cache import DocumentRegionsCache
from embedlsp.embedded_language_config import DEFAULT_LANGUAGE_BY_TYPE, EmbeddedLanguageConfig, LanguageId, RegionType
from embedlsp.ls_exceptions import InvalidSettingsError
from embedlsp.regions import RegionScanner

log = logging.getLogger(__name__)

SETTINGS_FILE_ENCODING = "utf-8"


def _language_id_value(key: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidSettingsError(f"{key} must be a non-empty language id, got {value!r}")
    return value.strip()


@dataclass(kw_only=True)
class EmbeddedLSPSettings(ToStringMixin):
    host_language_id: str = LanguageId.VUE
    default_languages: dict[RegionType, str] = field(default_factory=lambda: dict(DEFAULT_LANGUAGE_BY_TYPE))
    max_cached_documents: int = 10

    def __post_init__(self) -> None:
        if not self.host_language_id:
            raise InvalidSettingsError("host_language_id must not be empty")
        if self.max_cached_documents < 1:
            raise InvalidSettingsError(f"max_cached_documents must be positive, got {self.max_cached_documents}")
        self.default_languages = {**DEFAULT_LANGUAGE_BY_TYPE, **self.default_languages}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """
        Creates settings from a (possibly partial) dictionary, e.g. as read from a settings file.

        :param data: the dictionary; keys which are not given assume their default values
        :return: the settings
        """
        kwargs: dict[str, Any] = {}
        if "host_language_id" in data:
            kwargs["host_language_id"] = _language_id_value("host_language_id", data["host_language_id"])
        if "max_cached_documents" in data:
            value = data["max_cached_documents"]
            if isinstance(value, bool):
                raise InvalidSettingsError(f"max_cached_documents must be an integer, got {value!r}")
            try:
                kwargs["max_cached_documents"] = int(value)
            except (TypeError, ValueError) as e:
                raise InvalidSettingsError(f"max_cached_documents must be an integer, got {value!r}", cause=e) from e
        default_languages = data.get("default_languages") or {}
        if not isinstance(default_languages, Mapping):
            raise InvalidSettingsError(f"default_languages must be a mapping, got {type(default_languages).__name__}")
        try:
            kwargs["default_languages"] = {
                RegionType.parse(str(k)): _language_id_value(f"default_languages.{k}", v) for k, v in default_languages.items()
            }
        except ValueError as e:
            raise InvalidSettingsError("Invalid default_languages entry", cause=e) from e
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """
        Loads settings from a YAML file.

        :param path: the path to the YAML file
        :return: the settings
        """
        with LogTime(f"Loading embedded language settings from {path}", logger=log):
            with open(path, encoding=SETTINGS_FILE_ENCODING) as f:
                data = YAML(typ="safe").load(f)
        if data is None:
            data = {}
        elif not isinstance(data, Mapping):
            raise InvalidSettingsError(f"Settings file {path} must contain a mapping at the top level")
        return cls.from_dict(data)

    def to_language_config(self) -> EmbeddedLanguageConfig:
        return EmbeddedLanguageConfig(host_language_id=self.host_language_id, default_languages=dict(self.default_languages))

    def create_cache(self, scanner: RegionScanner) -> DocumentRegionsCache:
        return DocumentRegionsCache(scanner, self.to_language_config(), max_entries=self.max_cached_documents)
