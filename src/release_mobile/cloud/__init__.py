"""Cloud cache invalidation."""

from __future__ import annotations

from release_mobile.cloud.cloudfront import invalidate_distribution

__all__ = ["invalidate_distribution"]
