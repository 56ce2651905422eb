import json
import threading

import pytest

from journey.models.descriptor import BundleDescriptor, make_asset_manifest
from journey.utils.s3_handler import ObjectState, ProbeResult


# -------- fakes --------

class FakeStore:
    """Records calls; optionally fails uploads for given keys."""

    def __init__(self, state=ObjectState.ABSENT, error=None, fail_keys=()):
        self._state = state
        self._error = error
        self._fail_keys = set(fail_keys)
        self._lock = threading.Lock()
        self.probes = []
        self.uploads = {}
        self.content_types = {}
        self.copies = []

    def probe(self, bucket, key):
        self.probes.append((bucket, key))
        return ProbeResult(self._state, self._error)

    def upload_fileobj(self, bucket, key, fileobj, content_type):
        if key in self._fail_keys:
            raise RuntimeError(f"boom: {key}")
        data = fileobj.read()
        with self._lock:
            self.uploads[(bucket, key)] = data
            self.content_types[key] = content_type

    def copy_object(self, bucket, source_key, dest_key):
        self.copies.append((bucket, source_key, dest_key))
        return {"CopyObjectResult": {}}


def make_descriptor(**overrides):
    values = dict(
        name="demo",
        version="1.0.0",
        root_id="app-root",
        build_dir="build",
        manifest_path="build/asset-manifest.json",
        bucket="journeys",
        cdn_domain="https://cdn.example.com/",
        local_config_path="journey.json",
    )
    values.update(overrides)
    return BundleDescriptor(**values)


# -------- fixtures --------

@pytest.fixture
def journey_dir(tmp_path):
    """A build directory with two assets, an asset manifest and journey.json."""
    build = tmp_path / "build"
    (build / "static").mkdir(parents=True)
    (build / "static" / "main.abc123.js").write_text("console.log('hi');", encoding="utf-8")
    (build / "static" / "main.abc123.css").write_text("body { margin: 0; }", encoding="utf-8")

    manifest = {
        "main.js": "/static/main.abc123.js",
        "main.css": "/static/main.abc123.css",
    }
    manifest_path = build / "asset-manifest.json"
    manifest_path.write_text(json.dumps(manifest), encoding="utf-8")

    journey = {
        "name": "demo",
        "version": "1.0.0",
        "rootID": "app-root",
        "build": str(build),
        "manifest": str(manifest_path),
        "bucket": "from-config",
    }
    journey_path = tmp_path / "journey.json"
    journey_path.write_text(json.dumps(journey), encoding="utf-8")
    return tmp_path


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def demo_assets():
    return make_asset_manifest({
        "main.js": "/main.abc123.js",
        "main.css": "/main.abc123.css",
        "favicon.ico": "/favicon.ico",
    })
