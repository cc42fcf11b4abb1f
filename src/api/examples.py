# src/api/examples.py — v1
"""Catalog of sample glucose-curve images served to clients."""

from __future__ import annotations

import logging
from pathlib import Path

from glucolens.api.models import ExampleAsset
from glucolens.extraction.image_codec import guess_media_type, is_supported, media_subtype

logger = logging.getLogger(__name__)

EXAMPLES_URL_PREFIX = "/examples"


def list_examples(examples_dir: Path) -> list[ExampleAsset]:
    """Supported image files directly under ``examples_dir``, sorted by name."""
    directory = Path(examples_dir).expanduser()
    if not directory.is_dir():
        logger.warning("Examples directory not found: %s", directory)
        return []

    assets: list[ExampleAsset] = []
    for path in sorted(directory.iterdir()):
        if not path.is_file():
            continue
        media_type = guess_media_type(path)
        if not is_supported(media_subtype(media_type)):
            continue
        assets.append(
            ExampleAsset(
                name=path.name,
                url=f"{EXAMPLES_URL_PREFIX}/{path.name}",
                media_type=media_type,
            )
        )
    return assets


def find_example(examples_dir: Path, name: str) -> Path | None:
    """Resolve a catalog entry by name; anything outside the catalog is None."""
    for asset in list_examples(examples_dir):
        if asset.name == name:
            return Path(examples_dir).expanduser() / asset.name
    return None
