"""Exception hierarchy for release-mobile.

Every error raised by the release pipeline derives from
:class:`ReleaseMobileError` and carries an :class:`ErrorKind`. The command
layer turns an error into a single-line message with :func:`describe_error`
and into a process exit code with :func:`exit_code_for`.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, ClassVar, assert_never

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class ExitCode(enum.IntEnum):
    """Process exit codes (sysexits.h numbering)."""

    SUCCESS = 0
    USAGE = 64
    NO_INPUT = 66
    SOFTWARE = 70
    IO_ERROR = 74


class ErrorKind(enum.Enum):
    """Closed set of failure kinds the command layer knows how to report."""

    MISSING_MANIFEST = "missing-manifest"
    MALFORMED_MANIFEST = "malformed-manifest"
    INVALID_VERSION = "invalid-version"
    INVALID_BUILD_NUMBER = "invalid-build-number"
    MISSING_CHANGELOG = "missing-changelog"
    NO_NEW_CHANGES = "no-new-changes"
    VERSION_NOT_FOUND = "version-not-found"
    BRANCH_NOT_FOUND = "branch-not-found"
    EXTERNAL_COMMAND = "external-command"
    WEBHOOK_CONFIG = "webhook-config"
    WEBHOOK_NOT_FOUND = "webhook-not-found"
    WEBHOOK_DELIVERY = "webhook-delivery"
    CLOUD_CONFIG = "cloud-config"


class ReleaseMobileError(Exception):
    """Base exception for all release-mobile errors."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


# =============================================================================
# Manifest and version errors
# =============================================================================


class MissingManifestError(ReleaseMobileError):
    """The project manifest (pubspec.yaml) does not exist."""

    kind = ErrorKind.MISSING_MANIFEST

    def __init__(self, path: Path) -> None:
        super().__init__(f"Manifest not found: {path}")
        self.path = path


class MalformedManifestError(ReleaseMobileError):
    """The manifest has no usable version line."""

    kind = ErrorKind.MALFORMED_MANIFEST


class InvalidVersionError(ReleaseMobileError):
    """An explicit version is not three dot-separated integers."""

    kind = ErrorKind.INVALID_VERSION

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid version: {value!r}")
        self.value = value


class InvalidBuildNumberError(ReleaseMobileError):
    """An explicit build number is not a non-negative integer."""

    kind = ErrorKind.INVALID_BUILD_NUMBER

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid build number: {value!r}")
        self.value = value


# =============================================================================
# Changelog errors
# =============================================================================


class MissingChangelogError(ReleaseMobileError):
    """The changelog file does not exist or is empty."""

    kind = ErrorKind.MISSING_CHANGELOG

    def __init__(self, path: Path | str, *, empty: bool = False) -> None:
        state = "is empty" if empty else "not found"
        super().__init__(f"Changelog {state}: {path}")
        self.path = path
        self.empty = empty


class NoNewChangesError(ReleaseMobileError):
    """The newest changelog section does not hold anything new for a version."""

    kind = ErrorKind.NO_NEW_CHANGES

    def __init__(self, version: str) -> None:
        super().__init__(f"No new changes for version {version}")
        self.version = version


class VersionNotFoundError(ReleaseMobileError):
    """The changelog has no section for the requested version."""

    kind = ErrorKind.VERSION_NOT_FOUND

    def __init__(self, version: str) -> None:
        super().__init__(f"No changelog found for version {version}")
        self.version = version


# =============================================================================
# External collaborator errors
# =============================================================================


class BranchNotFoundError(ReleaseMobileError):
    """The branch to release from exists neither locally nor on origin."""

    kind = ErrorKind.BRANCH_NOT_FOUND

    def __init__(self, branch: str) -> None:
        super().__init__(f"Branch {branch} does not exist")
        self.branch = branch


class ExternalCommandError(ReleaseMobileError):
    """A git or aws process exited with a non-zero status."""

    kind = ErrorKind.EXTERNAL_COMMAND

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stderr: str | None = None,
    ) -> None:
        super().__init__(f"{' '.join(command)} failed with exit code {returncode}")
        self.command = list(command)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()


class WebhookConfigError(ReleaseMobileError):
    """No webhook (or its token) is configured for a notification target."""

    kind = ErrorKind.WEBHOOK_CONFIG


class WebhookNotFoundError(ReleaseMobileError):
    """Webhooks are configured, but not for the requested app."""

    kind = ErrorKind.WEBHOOK_NOT_FOUND

    def __init__(self, app_name: str, available: Sequence[str] = ()) -> None:
        super().__init__(f"Webhook not found for: {app_name}")
        self.app_name = app_name
        self.available = list(available)


class WebhookDeliveryError(ReleaseMobileError):
    """The HTTP request to a webhook could not be sent."""

    kind = ErrorKind.WEBHOOK_DELIVERY

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Could not deliver webhook to {url}: {reason}")
        self.url = url
        self.reason = reason


class CloudConfigError(ReleaseMobileError):
    """The CloudFront distribution id is not configured."""

    kind = ErrorKind.CLOUD_CONFIG


# =============================================================================
# Reporting
# =============================================================================


def describe_error(error: ReleaseMobileError) -> str:
    """Return the single-line message shown to the user for ``error``."""
    kind = error.kind
    match kind:
        case ErrorKind.MISSING_MANIFEST:
            return f"No {error.path.name} file found. Are you in the project's main directory?"
        case ErrorKind.MALFORMED_MANIFEST:
            return f"Invalid version format in manifest: {error.message}"
        case ErrorKind.INVALID_VERSION:
            return f"The provided version has an invalid format: {error.value}"
        case ErrorKind.INVALID_BUILD_NUMBER:
            return f"Invalid build number: {error.value}"
        case ErrorKind.MISSING_CHANGELOG:
            if error.empty:
                return f"{error.path} is empty."
            return f"No {error.path} file found."
        case ErrorKind.NO_NEW_CHANGES:
            return f"There are no new changes for version {error.version}."
        case ErrorKind.VERSION_NOT_FOUND:
            return f"No changelog found for version {error.version}"
        case ErrorKind.BRANCH_NOT_FOUND:
            return f"Branch {error.branch} does not exist."
        case ErrorKind.EXTERNAL_COMMAND:
            if error.stderr:
                return f"{error.message}: {error.stderr}"
            return error.message
        case ErrorKind.WEBHOOK_CONFIG | ErrorKind.CLOUD_CONFIG:
            return error.message
        case ErrorKind.WEBHOOK_NOT_FOUND:
            if error.available:
                return f"{error.message} (available apps: {', '.join(error.available)})"
            return error.message
        case ErrorKind.WEBHOOK_DELIVERY:
            return error.message
        case _:
            assert_never(kind)


def exit_code_for(error: ReleaseMobileError) -> ExitCode:
    """Return the process exit code for ``error``."""
    kind = error.kind
    match kind:
        case (
            ErrorKind.MISSING_MANIFEST
            | ErrorKind.MISSING_CHANGELOG
            | ErrorKind.VERSION_NOT_FOUND
        ):
            return ExitCode.NO_INPUT
        case ErrorKind.NO_NEW_CHANGES:
            return ExitCode.IO_ERROR
        case (
            ErrorKind.MALFORMED_MANIFEST
            | ErrorKind.INVALID_VERSION
            | ErrorKind.INVALID_BUILD_NUMBER
            | ErrorKind.BRANCH_NOT_FOUND
            | ErrorKind.EXTERNAL_COMMAND
            | ErrorKind.WEBHOOK_CONFIG
            | ErrorKind.WEBHOOK_NOT_FOUND
            | ErrorKind.WEBHOOK_DELIVERY
            | ErrorKind.CLOUD_CONFIG
        ):
            return ExitCode.SOFTWARE
        case _:
            assert_never(kind)
