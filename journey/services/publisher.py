# journey/services/publisher.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from journey.Keywords import JSON_CONTENT_TYPE
from journey.errors import JourneyError
from journey.models.descriptor import AssetManifest, BundleDescriptor
from journey.models.urls import PublicUrlManifest
from journey.services.uploader import DEFAULT_MAX_WORKERS, UploadReport, UploadTask, upload_all
from journey.services.url_manifest import build_public_urls
from journey.services.version_guard import check_available

logger = logging.getLogger(__name__)


class PublishState(Enum):
    PENDING = "pending"
    PUBLISHED = "published"
    FAILED = "failed"


@dataclass(frozen=True)
class PublishResult:
    state: PublishState
    report: UploadReport
    urls: PublicUrlManifest


def build_tasks(
    descriptor: BundleDescriptor,
    assets: AssetManifest,
    urls: PublicUrlManifest,
) -> List[UploadTask]:
    """One task per asset plus asset-manifest.json, journey.json and journey-urls.json."""
    tasks = []
    for relative in assets.values():
        # an empty slot is an optional asset, the uploader skips it
        source = descriptor.asset_path(relative) if relative.strip() else ""
        tasks.append(UploadTask(key=descriptor.asset_key(relative), source_path=source))
    # make sure to put the journey.json and asset-manifest.json into {bucket}/{name}/{version}/
    tasks.append(UploadTask(key=descriptor.asset_manifest_key, source_path=descriptor.manifest_path))
    tasks.append(UploadTask(key=descriptor.sentinel_key, source_path=descriptor.local_config_path))
    tasks.append(UploadTask(
        key=descriptor.urls_key,
        body=urls.to_json().encode("utf-8"),
        content_type=JSON_CONTENT_TYPE,
    ))
    return tasks


class PublishPipeline:
    """
    Publish one journey version: guard the version, build journey-urls.json,
    then upload everything at once. Nothing is rolled back on failure.
    """

    def __init__(
        self,
        descriptor: BundleDescriptor,
        assets: AssetManifest,
        store,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
        timeout: Optional[float] = None,
    ) -> None:
        self.descriptor = descriptor
        self.assets = assets
        self.store = store
        self.max_workers = max_workers
        self.timeout = timeout
        self.state = PublishState.PENDING
        self.failure: Optional[JourneyError] = None

    def run(self) -> PublishResult:
        d = self.descriptor
        try:
            check_available(d, self.store)
            urls = build_public_urls(d, self.assets)
            tasks = build_tasks(d, self.assets, urls)

            logger.info("Getting ready to upload %d files...", len(tasks))
            report = upload_all(
                d.bucket,
                tasks,
                self.store,
                max_workers=self.max_workers,
                timeout=self.timeout,
            )
        except JourneyError as e:
            self.state = PublishState.FAILED
            self.failure = e
            logger.error("Publishing %s/%s failed: %s", d.name, d.version, e)
            raise

        self.state = PublishState.PUBLISHED
        logger.info("Published %s/%s to s3://%s/%s/", d.name, d.version, d.bucket, d.prefix)
        return PublishResult(state=self.state, report=report, urls=urls)
