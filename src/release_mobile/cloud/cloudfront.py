"""CloudFront cache invalidation through the AWS CLI."""

from __future__ import annotations

import logging
import subprocess

from release_mobile.exceptions import CloudConfigError, ExternalCommandError

logger = logging.getLogger(__name__)


def invalidate_distribution(distribution_id: str | None, paths: str = "/*") -> str:
    """Create an invalidation for ``paths`` on a CloudFront distribution.

    Args:
        distribution_id: CloudFront distribution id
        paths: Invalidation path pattern

    Returns:
        The AWS CLI output

    Raises:
        CloudConfigError: If no distribution id is configured
        ExternalCommandError: If the aws command fails
    """
    if not distribution_id:
        raise CloudConfigError(
            "CloudFront distribution ID not found. Required: CLOUD_DISTRIBUTION"
        )

    command = [
        "aws",
        "cloudfront",
        "create-invalidation",
        "--distribution-id",
        distribution_id,
        "--paths",
        paths,
    ]
    logger.debug("Running: %s", " ".join(command))
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=True)
    except subprocess.CalledProcessError as e:
        raise ExternalCommandError(command, e.returncode, e.stderr or e.stdout) from e
    except FileNotFoundError as e:
        raise ExternalCommandError(command, 127, "aws executable not found") from e
    return result.stdout
