"""Typed shapes of the Discogs API responses used by the catalog.

Each model keeps the decoded JSON object in ``raw`` so fields that are not
modelled here stay reachable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class SearchType(str, Enum):
    """Result types accepted by the database search endpoint."""
    RELEASE = "release"
    MASTER = "master"
    ARTIST = "artist"
    LABEL = "label"


def _list_of_str(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def _objects(value: Any) -> List[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, Mapping)]


def _opt_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


@dataclass
class DiscogsSearchResult:
    """One item of a database search."""
    id: int
    type: str
    title: str
    thumb: str = ""
    cover_image: str = ""
    resource_url: str = ""
    country: Optional[str] = None
    year: Optional[str] = None
    format: List[str] = field(default_factory=list)
    label: List[str] = field(default_factory=list)
    genre: List[str] = field(default_factory=list)
    style: List[str] = field(default_factory=list)
    catno: Optional[str] = None
    barcode: List[str] = field(default_factory=list)
    uri: Optional[str] = None
    master_id: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiscogsSearchResult":
        year = data.get("year")
        return cls(
            id=_opt_int(data.get("id")) or 0,
            type=data.get("type") or "",
            title=data.get("title") or "",
            thumb=data.get("thumb") or "",
            cover_image=data.get("cover_image") or "",
            resource_url=data.get("resource_url") or "",
            country=data.get("country"),
            year=str(year) if year is not None else None,
            format=_list_of_str(data.get("format")),
            label=_list_of_str(data.get("label")),
            genre=_list_of_str(data.get("genre")),
            style=_list_of_str(data.get("style")),
            catno=data.get("catno"),
            barcode=_list_of_str(data.get("barcode")),
            uri=data.get("uri"),
            master_id=_opt_int(data.get("master_id")),
            raw=dict(data),
        )


@dataclass
class DiscogsPagination:
    """Pagination block of a search response."""
    page: int = 1
    pages: int = 1
    per_page: int = 0
    items: int = 0
    urls: Dict[str, str] = field(default_factory=dict)

    @property
    def has_next(self) -> bool:
        return "next" in self.urls or self.page < self.pages

    @classmethod
    def from_dict(cls, data: Any) -> "DiscogsPagination":
        if not isinstance(data, Mapping):
            return cls()
        urls = data.get("urls")
        return cls(
            page=_opt_int(data.get("page")) or 1,
            pages=_opt_int(data.get("pages")) or 1,
            per_page=_opt_int(data.get("per_page")) or 0,
            items=_opt_int(data.get("items")) or 0,
            urls={str(k): str(v) for k, v in urls.items()} if isinstance(urls, Mapping) else {},
        )


@dataclass
class DiscogsSearchResponse:
    """Results and pagination of a database search."""
    results: List[DiscogsSearchResult] = field(default_factory=list)
    pagination: DiscogsPagination = field(default_factory=DiscogsPagination)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.results)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiscogsSearchResponse":
        return cls(
            results=[DiscogsSearchResult.from_dict(r) for r in _objects(data.get("results"))],
            pagination=DiscogsPagination.from_dict(data.get("pagination")),
            raw=dict(data),
        )


@dataclass
class DiscogsArtist:
    name: str
    id: Optional[int] = None
    anv: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiscogsArtist":
        return cls(name=data.get("name") or "", id=_opt_int(data.get("id")), anv=data.get("anv") or None)


@dataclass
class DiscogsLabel:
    name: str
    catno: str = ""
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiscogsLabel":
        return cls(
            name=data.get("name") or "",
            catno=data.get("catno") or "",
            id=_opt_int(data.get("id")),
        )


@dataclass
class DiscogsFormat:
    name: str
    qty: str = ""
    descriptions: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiscogsFormat":
        qty = data.get("qty")
        return cls(
            name=data.get("name") or "",
            qty=str(qty) if qty is not None else "",
            descriptions=_list_of_str(data.get("descriptions")),
        )


@dataclass
class DiscogsTrack:
    position: str
    title: str
    duration: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiscogsTrack":
        return cls(
            position=data.get("position") or "",
            title=data.get("title") or "",
            duration=data.get("duration") or "",
        )


@dataclass
class DiscogsImage:
    type: str = ""
    uri: str = ""
    uri150: str = ""
    width: Optional[int] = None
    height: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiscogsImage":
        return cls(
            type=data.get("type") or "",
            uri=data.get("uri") or "",
            uri150=data.get("uri150") or "",
            width=_opt_int(data.get("width")),
            height=_opt_int(data.get("height")),
        )


@dataclass
class DiscogsIdentifier:
    """Free-form identifier such as a barcode or a matrix/runout etching."""
    type: str
    value: str
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiscogsIdentifier":
        return cls(
            type=data.get("type") or "",
            value=data.get("value") or "",
            description=data.get("description"),
        )


@dataclass
class DiscogsReleaseDetails:
    """Full metadata of one release from /releases/{id}."""
    id: int
    title: str
    artists: List[DiscogsArtist] = field(default_factory=list)
    labels: List[DiscogsLabel] = field(default_factory=list)
    formats: List[DiscogsFormat] = field(default_factory=list)
    year: Optional[int] = None
    released: Optional[str] = None
    country: Optional[str] = None
    genres: Optional[List[str]] = None
    styles: Optional[List[str]] = None
    tracklist: List[DiscogsTrack] = field(default_factory=list)
    images: List[DiscogsImage] = field(default_factory=list)
    identifiers: List[DiscogsIdentifier] = field(default_factory=list)
    notes: Optional[str] = None
    uri: Optional[str] = None
    resource_url: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def find_identifier(self, identifier_type: str) -> Optional[DiscogsIdentifier]:
        """Return the first identifier of the given type."""
        for identifier in self.identifiers:
            if identifier.type == identifier_type:
                return identifier
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiscogsReleaseDetails":
        genres = data.get("genres")
        styles = data.get("styles")
        return cls(
            id=_opt_int(data.get("id")) or 0,
            title=data.get("title") or "",
            artists=[DiscogsArtist.from_dict(a) for a in _objects(data.get("artists"))],
            labels=[DiscogsLabel.from_dict(lb) for lb in _objects(data.get("labels"))],
            formats=[DiscogsFormat.from_dict(f) for f in _objects(data.get("formats"))],
            year=_opt_int(data.get("year")),
            released=data.get("released"),
            country=data.get("country"),
            genres=_list_of_str(genres) if genres is not None else None,
            styles=_list_of_str(styles) if styles is not None else None,
            tracklist=[DiscogsTrack.from_dict(t) for t in _objects(data.get("tracklist"))],
            images=[DiscogsImage.from_dict(i) for i in _objects(data.get("images"))],
            identifiers=[DiscogsIdentifier.from_dict(i) for i in _objects(data.get("identifiers"))],
            notes=data.get("notes"),
            uri=data.get("uri"),
            resource_url=data.get("resource_url"),
            raw=dict(data),
        )


@dataclass
class DiscogsMasterRelease:
    """A master release from /masters/{id}, grouping versions of one album."""
    id: int
    title: str
    main_release: Optional[int] = None
    year: Optional[int] = None
    artists: List[DiscogsArtist] = field(default_factory=list)
    genres: List[str] = field(default_factory=list)
    styles: List[str] = field(default_factory=list)
    tracklist: List[DiscogsTrack] = field(default_factory=list)
    images: List[DiscogsImage] = field(default_factory=list)
    uri: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiscogsMasterRelease":
        return cls(
            id=_opt_int(data.get("id")) or 0,
            title=data.get("title") or "",
            main_release=_opt_int(data.get("main_release")),
            year=_opt_int(data.get("year")),
            artists=[DiscogsArtist.from_dict(a) for a in _objects(data.get("artists"))],
            genres=_list_of_str(data.get("genres")),
            styles=_list_of_str(data.get("styles")),
            tracklist=[DiscogsTrack.from_dict(t) for t in _objects(data.get("tracklist"))],
            images=[DiscogsImage.from_dict(i) for i in _objects(data.get("images"))],
            uri=data.get("uri"),
            raw=dict(data),
        )
