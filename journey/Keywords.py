from enum import Enum


class Keywords(Enum):
    PUBLISH = "publish"
    LATEST = "latest"


# reserved for the "current" pointer, never a publish target
RESERVED_VERSION = Keywords.LATEST.value

# well-known filenames written under {name}/{version}/
ASSET_MANIFEST_FILE = "asset-manifest.json"
JOURNEY_FILE = "journey.json"
JOURNEY_URLS_FILE = "journey-urls.json"

DEFAULT_CONTENT_TYPE = "application/octet-stream"
JSON_CONTENT_TYPE = "application/json"
