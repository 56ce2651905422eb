# journey/errors.py
from __future__ import annotations

from typing import List, Optional


class JourneyError(RuntimeError):
    """Base class for every user-visible journey failure."""


class ConfigLoadError(JourneyError):
    """Raised when journey.json or the asset manifest can't be read or parsed."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Unable to load configuration from {path}: {cause}")


class ValidationError(JourneyError):
    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__("Invalid journey configuration: " + "; ".join(self.violations))


class ReservedVersionError(JourneyError):
    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Version {version} is a reserved version. Please update and try again")


class VersionConflictError(JourneyError):
    def __init__(self, name: str, version: str):
        self.name = name
        self.version = version
        super().__init__(f"Version {name}/{version} already exists, publishing failed")


class ProbeError(JourneyError):
    """The existence probe failed for a reason other than a definitive not-found."""

    def __init__(self, bucket: str, key: str, cause: Optional[Exception] = None):
        self.bucket = bucket
        self.key = key
        self.cause = cause
        super().__init__(f"Unable to determine whether s3://{bucket}/{key} exists: {cause}")


class UploadError(JourneyError):
    """Raised by the object store when a single transfer fails."""


class TaskUploadError(JourneyError):
    def __init__(self, key: str, source: str, cause: BaseException):
        self.key = key
        self.source = source
        self.cause = cause
        super().__init__(f"Key: {key} (source: {source}) was not uploaded: {cause}")


class AggregateUploadError(JourneyError):
    def __init__(self, failures: List[TaskUploadError]):
        self.failures = list(failures)
        lines = [f"{len(self.failures)} upload(s) failed:"]
        lines.extend(f"  - {f}" for f in self.failures)
        super().__init__("\n".join(lines))


class PromoteError(JourneyError):
    """Raised when copying a version's journey-urls.json to latest fails."""


__all__ = [
    "JourneyError",
    "ConfigLoadError",
    "ValidationError",
    "ReservedVersionError",
    "VersionConflictError",
    "ProbeError",
    "UploadError",
    "TaskUploadError",
    "AggregateUploadError",
    "PromoteError",
]
