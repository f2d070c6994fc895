"""Models supplied by the routing layer: versions and the endpoints behind them."""

import datetime
import re
from functools import total_ordering

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from api_doc_pipeline.document.base import Param, Response

HUMAN_READABLE_MEDIA_TYPE = "text/html"

_VERSION_PATTERN = re.compile(r"^v?(\d+)(?:\.(\d+))?$")


@total_ordering
class ApiVersion(BaseModel):
    """A ``major.minor`` API version, ordered numerically."""

    model_config = ConfigDict(frozen=True)

    major: int
    minor: int = 0

    @model_validator(mode="before")
    @classmethod
    def _parse(cls, data):
        if isinstance(data, bool):
            raise ValueError("API version cannot be a boolean")
        if isinstance(data, float):
            raise ValueError(f"API version {data!r} was read as a number; quote it to keep its digits")
        if isinstance(data, int):
            data = str(data)
        if isinstance(data, str):
            match = _VERSION_PATTERN.match(data.strip())
            if not match:
                raise ValueError(f"Invalid API version: {data!r}")
            return {"major": int(match.group(1)), "minor": int(match.group(2) or 0)}
        return data

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    def __lt__(self, other: "ApiVersion") -> bool:
        if not isinstance(other, ApiVersion):
            return NotImplemented
        return (self.major, self.minor) < (other.major, other.minor)


class Link(BaseModel):
    """A sunset-related link; only ``text/html`` links are meant for people."""

    model_config = ConfigDict(frozen=True)

    href: str
    title: str | None = None
    type: str | None = None

    @property
    def is_human_readable(self) -> bool:
        if not self.type:
            return False
        media_type = self.type.split(";", 1)[0].strip().lower()
        return media_type == HUMAN_READABLE_MEDIA_TYPE


class SunsetPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime.date | None = None
    links: list[Link] = []

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, value):
        if isinstance(value, datetime.datetime):
            return value.date()
        return value

    @property
    def human_readable_links(self) -> list[Link]:
        return [link for link in self.links if link.is_human_readable]


class VersionDescriptor(BaseModel):
    """Metadata for one API version, correlated to a document by ``name``."""

    model_config = ConfigDict(frozen=True)

    name: str  # v1
    version: ApiVersion
    deprecated: bool = False
    sunset_policy: SunsetPolicy | None = None


class RouteEndpoint(BaseModel):
    """An endpoint registered with the routing layer."""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    summary: str = ""
    operation_id: str | None = None
    tags: list[str] = []
    parameters: list[Param] = []
    responses: dict[str, Response] = {}
    deprecated: bool = False
    requires_authorization: bool = False
    versions: list[ApiVersion] = []  # empty: every version

    @property
    def key(self) -> str:
        return f"{self.method.upper()} {self.path}"

    def applies_to(self, version: ApiVersion) -> bool:
        return not self.versions or version in self.versions
