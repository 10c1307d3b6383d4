"""Mapping of Discogs release details onto catalog record fields."""

from typing import Optional

from ..domain.catalog.entities import VinylData
from ..infrastructure.external.discogs_models import DiscogsReleaseDetails

MATRIX_RUNOUT = "Matrix / Runout"


def select_cover_image(release: DiscogsReleaseDetails) -> Optional[str]:
    """Full-size URI of the first image, else its thumbnail, else None."""
    if not release.images:
        return None
    first = release.images[0]
    return first.uri or first.uri150 or None


def release_to_vinyl_data(release: DiscogsReleaseDetails) -> VinylData:
    """
    Build the fields of a new record from a Discogs release.

    The first artist, label and format are used. The matrix/runout comes from
    the first identifier of type "Matrix / Runout". Enrichment fields missing
    from the release are left unset.
    """
    first_label = release.labels[0] if release.labels else None
    first_format = release.formats[0] if release.formats else None
    matrix = release.find_identifier(MATRIX_RUNOUT)

    data = VinylData(
        artist_name=release.artists[0].name if release.artists else "",
        album_name=release.title or "",
        serial_number=first_label.catno if first_label else "",
        matrix_runout=matrix.value if matrix else "",
        discogs_id=release.id,
    )

    optional = {
        "year": release.year,
        "country": release.country,
        "genre": list(release.genres) if release.genres is not None else None,
        "style": list(release.styles) if release.styles is not None else None,
        "label": first_label.name if first_label else None,
        "format": first_format.name if first_format else None,
        "discogs_url": release.uri,
    }
    for name, value in optional.items():
        if value is not None:
            setattr(data, name, value)

    cover = select_cover_image(release)
    if cover:
        data.image_url = cover

    return data
