# journey/services/uploader.py
from __future__ import annotations

import io
import logging
import mimetypes
import os
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from journey.Keywords import DEFAULT_CONTENT_TYPE
from journey.errors import AggregateUploadError, TaskUploadError

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 16

UPLOADED = "uploaded"
SKIPPED = "skipped"


# One file (or in-memory body) headed for one key
@dataclass(frozen=True)
class UploadTask:
    key: str
    source_path: str = ""              # empty means nothing to upload
    body: Optional[bytes] = None       # in-memory source, wins over source_path
    content_type: Optional[str] = None

    @property
    def source(self) -> str:
        if self.body is not None:
            return "<memory>"
        return self.source_path


@dataclass
class UploadReport:
    uploaded: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.uploaded) + len(self.skipped)


def content_type_for(path: str) -> str:
    mime_type, _ = mimetypes.guess_type(path)
    return mime_type or DEFAULT_CONTENT_TYPE


def _upload_one(bucket: str, task: UploadTask, store) -> str:
    logger.info("Starting to upload %s, at this path: %s, to this bucket: %s", task.key, task.source, bucket)

    if task.body is not None:
        content_type = task.content_type or content_type_for(task.key)
        try:
            store.upload_fileobj(bucket, task.key, io.BytesIO(task.body), content_type)
        except Exception as e:
            raise TaskUploadError(task.key, task.source, e) from e
        return UPLOADED

    if not task.source_path:
        logger.info("Key: %s, does not have a path and will not be uploaded", task.key)
        return SKIPPED

    try:
        abs_path = os.path.abspath(task.source_path)
    except (OSError, ValueError) as e:
        logger.error("Key: %s, had an issue getting absolute file path and was not uploaded", task.key)
        raise TaskUploadError(task.key, task.source_path, e) from e

    try:
        f = open(abs_path, "rb")
    except OSError as e:
        logger.error("Key: %s, was unable to be opened and will not be uploaded", task.key)
        raise TaskUploadError(task.key, abs_path, e) from e

    with f:
        content_type = task.content_type or content_type_for(abs_path)
        try:
            store.upload_fileobj(bucket, task.key, f, content_type)
        except Exception as e:
            logger.error("Key: %s, failed to upload: %s", task.key, e)
            raise TaskUploadError(task.key, abs_path, e) from e
    return UPLOADED


def upload_all(
    bucket: str,
    tasks: Sequence[UploadTask],
    store,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    timeout: Optional[float] = None,
) -> UploadReport:
    """
    Upload every task concurrently and wait for all of them. A failed task
    never stops its siblings; every failure is reported together at the end.
    """
    if max_workers <= 0:
        raise ValueError("max_workers must be a positive integer")

    report = UploadReport()
    failures: List[TaskUploadError] = []
    if not tasks:
        return report

    executor = ThreadPoolExecutor(max_workers=min(max_workers, len(tasks)), thread_name_prefix="journey-upload")
    try:
        futures = {executor.submit(_upload_one, bucket, task, store): task for task in tasks}
        wait(futures, timeout=timeout)

        # preserve submission order in the report
        for future, task in futures.items():
            # re-check here, a task may have finished after wait() returned
            if not future.done():
                future.cancel()
                failures.append(TaskUploadError(
                    task.key, task.source, TimeoutError(f"not finished within {timeout}s")
                ))
                continue
            try:
                outcome = future.result()
            except TaskUploadError as e:
                failures.append(e)
                continue
            except Exception as e:
                failures.append(TaskUploadError(task.key, task.source, e))
                continue
            if outcome == SKIPPED:
                report.skipped.append(task.key)
            else:
                report.uploaded.append(task.key)
    finally:
        executor.shutdown(wait=timeout is None, cancel_futures=True)

    if failures:
        for failure in failures:
            logger.error("%s", failure)
        raise AggregateUploadError(failures)

    logger.info("Uploaded %d file(s), skipped %d", len(report.uploaded), len(report.skipped))
    return report
