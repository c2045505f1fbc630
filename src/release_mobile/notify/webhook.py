"""JSON webhook delivery."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from release_mobile.exceptions import WebhookDeliveryError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def post_json(
    url: str,
    body: dict[str, Any],
    headers: dict[str, str] | None = None,
    *,
    client: httpx.Client | None = None,
) -> httpx.Response:
    """POST ``body`` as JSON to ``url``.

    The response status is not checked; callers decide what a non-2xx
    answer means.

    Args:
        url: Webhook URL
        body: JSON-serializable payload
        headers: Extra headers merged over ``Content-Type: application/json``
        client: Optional client to send with (a new one is used otherwise)

    Returns:
        The HTTP response

    Raises:
        WebhookDeliveryError: If the request could not be sent
    """
    merged = {**JSON_HEADERS, **(headers or {})}
    try:
        if client is not None:
            response = client.post(url, json=body, headers=merged)
        else:
            with httpx.Client() as own_client:
                response = own_client.post(url, json=body, headers=merged)
    except httpx.HTTPError as e:
        raise WebhookDeliveryError(url, str(e)) from e

    logger.debug("POST %s -> %s", url, response.status_code)
    return response
