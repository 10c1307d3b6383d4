"""Catalog Context Entities.

This module defines the entities for the vinyl catalog: the persisted
``VinylRecord`` and ``VinylData``, the partial field set used to create and
update records. Optional fields distinguish "not set" (``UNSET``) from an
explicit ``None`` so that merging a patch never overwrites a field that the
caller did not mention.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Optional


class _Unset:
    """Sentinel type for a field that has not been set."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET: Any = _Unset()

# Python attribute name -> stored (wire) key
FIELD_KEYS: Dict[str, str] = {
    "artist_name": "artistName",
    "album_name": "albumName",
    "serial_number": "serialNumber",
    "matrix_runout": "matrixRunout",
    "image_url": "imageUrl",
    "year": "year",
    "country": "country",
    "genre": "genre",
    "style": "style",
    "label": "label",
    "format": "format",
    "discogs_id": "discogsId",
    "discogs_url": "discogsUrl",
}
_KEY_FIELDS: Dict[str, str] = {key: name for name, key in FIELD_KEYS.items()}

REQUIRED_TEXT_FIELDS = ("artist_name", "album_name", "serial_number", "matrix_runout")
ENRICHMENT_FIELDS = (
    "year",
    "country",
    "genre",
    "style",
    "label",
    "format",
    "discogs_id",
    "discogs_url",
)


def is_set(value: Any) -> bool:
    """Return True unless value is the UNSET sentinel."""
    return value is not UNSET


def _copy_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return list(value)
    return value


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class VinylData:
    """A partial set of record fields.

    Every field defaults to ``UNSET``. Used as the input of record creation
    and as the patch applied by record updates.
    """

    artist_name: Optional[str] = UNSET
    album_name: Optional[str] = UNSET
    serial_number: Optional[str] = UNSET
    matrix_runout: Optional[str] = UNSET
    image_url: Optional[str] = UNSET
    year: Optional[int] = UNSET
    country: Optional[str] = UNSET
    genre: Optional[List[str]] = UNSET
    style: Optional[List[str]] = UNSET
    label: Optional[str] = UNSET
    format: Optional[str] = UNSET
    discogs_id: Optional[int] = UNSET
    discogs_url: Optional[str] = UNSET

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VinylData":
        """Build a patch from a mapping keyed by attribute or stored names.

        Keys present in the mapping are set, including those whose value is
        ``None``. Unknown keys raise ValueError.
        """
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = key if key in FIELD_KEYS else _KEY_FIELDS.get(key)
            if name is None:
                raise ValueError(f"Unknown record field: {key}")
            kwargs[name] = _copy_value(value)
        return cls(**kwargs)

    def set_fields(self) -> Dict[str, Any]:
        """Return the fields that are set, keyed by attribute name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if is_set(getattr(self, f.name))
        }

    def to_dict(self) -> Dict[str, Any]:
        """Return the set fields keyed by their stored names."""
        return {FIELD_KEYS[name]: _copy_value(value) for name, value in self.set_fields().items()}

    def is_empty(self) -> bool:
        return not self.set_fields()


@dataclass(kw_only=True)
class VinylRecord:
    """
    A catalogued vinyl record.

    The four descriptive text fields are always strings (possibly empty) and
    ``image_url`` is a string or ``None``. Enrichment fields sourced from a
    Discogs lookup stay ``UNSET`` unless the record was created or updated
    with them. Timestamps are epoch milliseconds.
    """

    id: str
    artist_name: str = ""
    album_name: str = ""
    serial_number: str = ""
    matrix_runout: str = ""
    image_url: Optional[str] = None

    # Discogs enrichment
    year: Optional[int] = UNSET
    country: Optional[str] = UNSET
    genre: Optional[List[str]] = UNSET
    style: Optional[List[str]] = UNSET
    label: Optional[str] = UNSET
    format: Optional[str] = UNSET
    discogs_id: Optional[int] = UNSET
    discogs_url: Optional[str] = UNSET

    created_at: int = 0
    updated_at: int = 0

    @property
    def has_discogs_data(self) -> bool:
        """True if the record carries a Discogs release id."""
        return is_set(self.discogs_id) and self.discogs_id is not None

    def merged(self, updates: VinylData, updated_at: int) -> "VinylRecord":
        """Return a copy with the set fields of ``updates`` applied."""
        changes = {name: _copy_value(value) for name, value in updates.set_fields().items()}
        for name in REQUIRED_TEXT_FIELDS:
            if name in changes and changes[name] is None:
                changes[name] = ""
        changes["updated_at"] = updated_at
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored representation (camelCase keys).

        Unset enrichment fields are omitted; ``imageUrl`` is always present.
        """
        result: Dict[str, Any] = {"id": self.id}
        for name in REQUIRED_TEXT_FIELDS:
            result[FIELD_KEYS[name]] = getattr(self, name)
        result["imageUrl"] = self.image_url
        for name in ENRICHMENT_FIELDS:
            value = getattr(self, name)
            if is_set(value):
                result[FIELD_KEYS[name]] = _copy_value(value)
        result["createdAt"] = self.created_at
        result["updatedAt"] = self.updated_at
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VinylRecord":
        """Rebuild a record from its stored representation.

        Raises ValueError if the mapping is not a well-formed record.
        """
        if not isinstance(data, Mapping):
            raise ValueError("Record must be an object")

        record_id = data.get("id")
        if not isinstance(record_id, str) or not record_id:
            raise ValueError("Record id must be a non-empty string")

        kwargs: Dict[str, Any] = {"id": record_id}
        for name in REQUIRED_TEXT_FIELDS:
            value = data.get(FIELD_KEYS[name], "")
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise ValueError(f"Field {FIELD_KEYS[name]} must be a string")
            kwargs[name] = value

        image_url = data.get("imageUrl")
        if image_url is not None and not isinstance(image_url, str):
            raise ValueError("Field imageUrl must be a string or null")
        kwargs["image_url"] = image_url

        for name in ENRICHMENT_FIELDS:
            key = FIELD_KEYS[name]
            if key in data:
                kwargs[name] = _copy_value(data[key])

        for key, name in (("createdAt", "created_at"), ("updatedAt", "updated_at")):
            value = data.get(key)
            if not _is_int(value):
                raise ValueError(f"Field {key} must be an integer timestamp")
            kwargs[name] = value

        return cls(**kwargs)
