# journey/services/latest.py
import logging

from journey.Keywords import RESERVED_VERSION
from journey.errors import ReservedVersionError
from journey.models.descriptor import BundleDescriptor

logger = logging.getLogger(__name__)


def promote_latest(descriptor: BundleDescriptor, store):
    """Point {name}/latest/journey-urls.json at this version's urls."""
    if descriptor.version == RESERVED_VERSION:
        raise ReservedVersionError(descriptor.version)

    response = store.copy_object(descriptor.bucket, descriptor.urls_key, descriptor.latest_urls_key)
    logger.info("Set %s/%s as the latest version", descriptor.name, descriptor.version)
    return response
