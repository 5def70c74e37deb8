"""Data models for package descriptors and livecheck configuration."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class URLSymbol(str, Enum):
    """Symbolic names for the URL slots of a package."""

    HEAD = "head"
    HOMEPAGE = "homepage"
    STABLE = "stable"
    URL = "url"


class LiteralURL(BaseModel):
    """A livecheck URL given verbatim."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(description="URL to check")


class SymbolicURL(BaseModel):
    """A livecheck URL naming one of the package's own URL slots."""

    model_config = ConfigDict(frozen=True)

    # Kept as a plain string: unknown tags must survive parsing and resolve to nothing
    tag: str = Field(description="Slot name, e.g. 'homepage' or 'head'")


URLReference = Union[LiteralURL, SymbolicURL]


class LivecheckBlock(BaseModel):
    """The livecheck configuration declared by a formula or cask."""

    model_config = ConfigDict(frozen=True)

    url: Optional[URLReference] = Field(
        default=None, description="Literal URL or symbolic slot to check"
    )
    regex: Optional[str] = Field(
        default=None, description="Pattern used to extract versions"
    )
    skip: bool = Field(default=False, description="Whether checking is disabled")
    skip_msg: Optional[str] = Field(
        default=None, description="Reason given for skipping"
    )

    @field_validator("url", mode="before")
    @classmethod
    def _parse_reference(cls, value: Any) -> Any:
        if isinstance(value, URLSymbol):
            return SymbolicURL(tag=value.value)
        if isinstance(value, str):
            return LiteralURL(url=value)
        return value


class PackageDescriptor(BaseModel, ABC):
    """Common capabilities of formulae and casks."""

    model_config = ConfigDict(frozen=True)

    homepage: Optional[str] = Field(default=None, description="Project homepage URL")
    url: Optional[str] = Field(default=None, description="Primary download URL")
    livecheck: Optional[LivecheckBlock] = Field(
        default=None, description="Declared livecheck configuration"
    )

    kind: ClassVar[str] = "package"

    @abstractmethod
    def identifier(self) -> str:
        """Short name of the package."""

    @abstractmethod
    def full_identifier(self) -> str:
        """Name qualified by its tap, where it has one."""

    def homepage_url(self) -> Optional[str]:
        return self.homepage

    def primary_download_url(self) -> Optional[str]:
        return self.url

    @property
    def livecheckable(self) -> bool:
        """True when the package declares a livecheck block."""
        return self.livecheck is not None


class FormulaDescriptor(PackageDescriptor):
    """A Homebrew formula."""

    kind: ClassVar[str] = "formula"

    name: str = Field(description="Formula name")
    full_name: Optional[str] = Field(
        default=None, description="Tap-qualified name, e.g. 'user/tap/foo'"
    )
    head: Optional[str] = Field(default=None, description="Version-control URL")

    def identifier(self) -> str:
        return self.name

    def full_identifier(self) -> str:
        return self.full_name or self.name

    def head_url(self) -> Optional[str]:
        return self.head

    @classmethod
    def from_api(cls, data: dict) -> "FormulaDescriptor":
        """Build a formula from a formulae.brew.sh API record.

        The flat form (``url``/``head`` at the top level) is accepted too.

        Args:
            data: Decoded JSON record.

        Returns:
            FormulaDescriptor for the record.
        """
        urls = data.get("urls") or {}
        stable = (urls.get("stable") or {}).get("url") or data.get("url")
        head = (urls.get("head") or {}).get("url") or data.get("head")

        return cls(
            name=data.get("name"),
            full_name=data.get("full_name"),
            homepage=data.get("homepage"),
            url=stable,
            head=head,
            livecheck=data.get("livecheck"),
        )


class CaskDescriptor(PackageDescriptor):
    """A Homebrew cask."""

    kind: ClassVar[str] = "cask"

    token: str = Field(description="Cask token")
    full_token: Optional[str] = Field(
        default=None, description="Tap-qualified token"
    )

    def identifier(self) -> str:
        return self.token

    def full_identifier(self) -> str:
        return self.full_token or self.token

    @classmethod
    def from_api(cls, data: dict) -> "CaskDescriptor":
        """Build a cask from a formulae.brew.sh API record."""
        return cls(
            token=data.get("token"),
            full_token=data.get("full_token"),
            homepage=data.get("homepage"),
            url=data.get("url"),
            livecheck=data.get("livecheck"),
        )
