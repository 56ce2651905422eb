# journey/models/descriptor.py
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from journey.Keywords import (
    ASSET_MANIFEST_FILE,
    JOURNEY_FILE,
    JOURNEY_URLS_FILE,
    RESERVED_VERSION,
)

# json key in journey.json -> dataclass field
JSON_FIELDS = {
    "name": "name",
    "version": "version",
    "rootID": "root_id",
    "build": "build_dir",
    "manifest": "manifest_path",
    "bucket": "bucket",
}


# The journey.json configuration plus the values given at invocation time
@dataclass(frozen=True)
class BundleDescriptor:
    """Everything needed to publish one name/version of a journey."""
    name: str
    version: str
    root_id: str             # passed through to every js entry
    build_dir: str           # prefix for every asset relative path
    manifest_path: str       # asset-manifest.json on disk
    bucket: str
    cdn_domain: str          # e.g. https://changeme.cloudfront.net/
    local_config_path: str   # the journey.json this was loaded from

    @classmethod
    def from_json(cls, data: Dict[str, Any], **overrides: str) -> "BundleDescriptor":
        """
        Build a descriptor from a parsed journey.json document. Missing keys
        become empty strings so validation can report all of them at once.
        """
        values = {attr: _as_str(data.get(key)) for key, attr in JSON_FIELDS.items()}
        values.setdefault("cdn_domain", "")
        values.setdefault("local_config_path", "")
        for attr, value in overrides.items():
            if value:
                values[attr] = value
        return cls(**values)

    @property
    def prefix(self) -> str:
        return f"{self.name}/{self.version}"

    def asset_path(self, relative: str) -> str:
        """Local path to an asset listed in the manifest."""
        return os.path.join(self.build_dir, relative.lstrip("/"))

    def asset_key(self, relative: str) -> str:
        """Key to use in the s3 bucket."""
        return f"{self.prefix}/{relative.lstrip('/')}"

    @property
    def asset_manifest_key(self) -> str:
        return self.asset_key(ASSET_MANIFEST_FILE)

    @property
    def sentinel_key(self) -> str:
        # journey.json doubles as the "this version exists" marker
        return self.asset_key(JOURNEY_FILE)

    @property
    def urls_key(self) -> str:
        return self.asset_key(JOURNEY_URLS_FILE)

    @property
    def latest_urls_key(self) -> str:
        return f"{self.name}/{RESERVED_VERSION}/{JOURNEY_URLS_FILE}"

    def public_url(self, relative: str) -> str:
        """cdn_domain + asset key, with a "/" added if the domain lacks a trailing one."""
        domain = self.cdn_domain if self.cdn_domain.endswith("/") else self.cdn_domain + "/"
        return domain + self.asset_key(relative)


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


# ---- Validation ----
def validate_descriptor(
    descriptor: BundleDescriptor,
    required: Optional[Iterable[str]] = None,
) -> List[str]:
    """Return one message per required field that is missing or blank."""
    names = list(required) if required is not None else [f.name for f in fields(descriptor)]
    violations = []
    for name in names:
        value = getattr(descriptor, name)
        if not isinstance(value, str) or not value.strip():
            violations.append(f"'{name}' is required")
    return violations


# ---- Asset manifest ----
AssetManifest = Mapping[str, str]


def make_asset_manifest(data: Dict[str, Any]) -> AssetManifest:
    """Freeze a parsed asset-manifest.json into a read-only mapping."""
    if not isinstance(data, dict):
        raise TypeError(f"asset manifest must be a JSON object, got {type(data).__name__}")
    for name, path in data.items():
        if not isinstance(path, str):
            raise TypeError(f"asset '{name}' must map to a string path, got {type(path).__name__}")
    return MappingProxyType(dict(data))


__all__ = [
    "BundleDescriptor",
    "AssetManifest",
    "make_asset_manifest",
    "validate_descriptor",
    "JSON_FIELDS",
]
