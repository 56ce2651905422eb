# journey/services/config_loader.py
from __future__ import annotations

import json
import logging
import os
from typing import Any, Iterable, Optional

from journey.errors import ConfigLoadError, ValidationError
from journey.models.descriptor import (
    AssetManifest,
    BundleDescriptor,
    make_asset_manifest,
    validate_descriptor,
)

logger = logging.getLogger(__name__)


def _read_json(path: str) -> Any:
    try:
        abs_path = os.path.abspath(path)
        with open(abs_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        raise ConfigLoadError(path, e) from e


def load_descriptor(
    path: str,
    *,
    bucket: Optional[str] = None,
    cdn_domain: Optional[str] = None,
) -> BundleDescriptor:
    """
    Load journey.json and merge in the invocation-time values. A bucket
    given here wins over the one in the document.
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigLoadError(path, TypeError("journey config must be a JSON object"))

    descriptor = BundleDescriptor.from_json(
        data,
        bucket=bucket or "",
        cdn_domain=cdn_domain or "",
        local_config_path=path,
    )
    logger.info("Successfully loaded %s configuration", path)
    return descriptor


def load_asset_manifest(path: str) -> AssetManifest:
    data = _read_json(path)
    try:
        assets = make_asset_manifest(data)
    except TypeError as e:
        raise ConfigLoadError(path, e) from e
    logger.info("Successfully loaded Asset Manifest configuration (%d assets)", len(assets))
    return assets


def ensure_valid(
    descriptor: BundleDescriptor,
    required: Optional[Iterable[str]] = None,
) -> BundleDescriptor:
    violations = validate_descriptor(descriptor, required)
    if violations:
        raise ValidationError(violations)
    return descriptor
