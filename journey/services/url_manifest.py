# journey/services/url_manifest.py
import logging
import os

from journey.models.descriptor import AssetManifest, BundleDescriptor
from journey.models.urls import CssEntry, JsEntry, PublicUrlManifest

logger = logging.getLogger(__name__)


def build_public_urls(descriptor: BundleDescriptor, assets: AssetManifest) -> PublicUrlManifest:
    """Build the css/js url lists for journey-urls.json. No I/O."""
    css = []
    js = []

    for relative in assets.values():
        # https://changeme.cloudfront.net/{name}/{version}/path
        url = descriptor.public_url(relative)

        ext = os.path.splitext(relative)[1]
        if ext == ".css":
            css.append(CssEntry(url=url))
        elif ext == ".js":
            js.append(JsEntry(url=url, root_id=descriptor.root_id))
        else:
            logger.info("Do not support adding %r files to journey-urls.json (%s)", ext, relative)

    return PublicUrlManifest(css_entries=tuple(css), js_entries=tuple(js))
