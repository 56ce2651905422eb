# journey/services/version_guard.py
import logging

from journey.Keywords import RESERVED_VERSION
from journey.errors import ProbeError, ReservedVersionError, VersionConflictError
from journey.models.descriptor import BundleDescriptor
from journey.utils.s3_handler import ObjectState

logger = logging.getLogger(__name__)


def check_available(descriptor: BundleDescriptor, store) -> None:
    """
    Make sure the version is not already published; we don't want to publish
    over something. Only a definitive not-found lets the publish go ahead.
    """
    if descriptor.version == RESERVED_VERSION:
        raise ReservedVersionError(descriptor.version)

    result = store.probe(descriptor.bucket, descriptor.sentinel_key)
    if result.state is ObjectState.PRESENT:
        raise VersionConflictError(descriptor.name, descriptor.version)
    if result.state is not ObjectState.ABSENT:
        raise ProbeError(descriptor.bucket, descriptor.sentinel_key, result.error)

    logger.info("Version %s/%s is NOT being used already", descriptor.name, descriptor.version)
