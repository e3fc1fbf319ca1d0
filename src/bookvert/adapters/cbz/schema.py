"""ComicInfo.xml schema written into every archive."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import ClassVar
from xml.etree import ElementTree as ET

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LANGUAGE_TAG = re.compile(r"[A-Za-z]{2,3}(-[A-Za-z0-9]{1,8})*")


class Manga(StrEnum):
    YES = "Yes"
    NO = "No"
    YES_AND_RIGHT_TO_LEFT = "YesAndRightToLeft"


class SeriesMetadata(BaseModel):
    """Series-wide values supplied on the command line."""

    model_config = ConfigDict(frozen=True)

    series: str | None = None
    writer: str | None = None
    penciller: str | None = None
    publisher: str | None = None
    genre: str | None = None
    language_iso: str | None = None
    manga: Manga | None = None
    summary: str | None = None

    @field_validator("language_iso")
    @classmethod
    def _validate_language(cls, value: str | None) -> str | None:
        if value is not None and not _LANGUAGE_TAG.fullmatch(value):
            raise ValueError(f"Invalid language tag {value!r}")
        return value


class ComicInfo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    NAMESPACES: ClassVar[dict[str, str]] = {
        "xmlns:xsi": "http://www.w3.org/2001/XMLSchema-instance",
        "xmlns:xsd": "http://www.w3.org/2001/XMLSchema",
    }

    title: str = Field(alias="Title")
    series: str = Field(alias="Series")
    number: int | None = Field(default=None, alias="Number")
    page_count: int = Field(alias="PageCount", ge=0)
    writer: str | None = Field(default=None, alias="Writer")
    penciller: str | None = Field(default=None, alias="Penciller")
    publisher: str | None = Field(default=None, alias="Publisher")
    genre: str | None = Field(default=None, alias="Genre")
    language_iso: str | None = Field(default=None, alias="LanguageISO")
    manga: Manga | None = Field(default=None, alias="Manga")
    summary: str | None = Field(default=None, alias="Summary")

    @classmethod
    def for_book(
        cls,
        *,
        title: str,
        number: int | None,
        page_count: int,
        metadata: SeriesMetadata,
    ) -> ComicInfo:
        return cls(
            title=title if number is None else f"{title}{number}",
            series=metadata.series or title,
            number=number,
            page_count=page_count,
            writer=metadata.writer,
            penciller=metadata.penciller,
            publisher=metadata.publisher,
            genre=metadata.genre,
            language_iso=metadata.language_iso,
            manga=metadata.manga,
            summary=metadata.summary,
        )

    def to_xml(self) -> str:
        root = ET.Element("ComicInfo", self.NAMESPACES)
        for tag, value in self.model_dump(by_alias=True, exclude_none=True, mode="json").items():
            ET.SubElement(root, tag).text = str(value)
        ET.indent(root)
        body = ET.tostring(root, encoding="unicode")
        return f'<?xml version="1.0" encoding="utf-8"?>\n{body}\n'


__all__ = ["ComicInfo", "Manga", "SeriesMetadata"]
