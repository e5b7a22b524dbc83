from __future__ import annotations

import logging

import httpx

from .types import Platform, VideoMetadata

logger = logging.getLogger(__name__)

OEMBED_ENDPOINTS = {
    Platform.TIKTOK: "https://www.tiktok.com/oembed",
    Platform.YOUTUBE: "https://www.youtube.com/oembed",
}
DEFAULT_TIMEOUT_SECONDS = 5.0


def _clean_string(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _request_oembed(client: httpx.Client, endpoint: str, url: str) -> dict | None:
    response = client.get(endpoint, params={"url": url})
    if not response.is_success:
        logger.warning("oembed.bad_status endpoint=%s status=%s", endpoint, response.status_code)
        return None

    data = response.json()
    if not isinstance(data, dict):
        logger.warning("oembed.bad_payload endpoint=%s type=%s", endpoint, type(data).__name__)
        return None
    return data


def fetch_video_metadata(
    url: str,
    platform: Platform,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    client: httpx.Client | None = None,
) -> VideoMetadata | None:
    """
    Look up title and author for a video URL through the platform's oEmbed endpoint.

    Best effort: any failure (HTTP status, bad JSON, network error, timeout)
    is logged and yields None. A single attempt is made.
    """
    endpoint = OEMBED_ENDPOINTS.get(platform)
    if endpoint is None:
        return None

    logger.info("oembed.fetch platform=%s endpoint=%s", platform.value, endpoint)
    try:
        if client is not None:
            data = _request_oembed(client, endpoint, url)
        else:
            with httpx.Client(timeout=timeout, follow_redirects=True) as own_client:
                data = _request_oembed(own_client, endpoint, url)
    except httpx.TimeoutException:
        logger.warning("oembed.timeout platform=%s timeout=%.1fs", platform.value, timeout)
        return None
    except httpx.HTTPError as error:
        logger.warning("oembed.network_error platform=%s error=%s", platform.value, error)
        return None
    except ValueError as error:
        logger.warning("oembed.invalid_json platform=%s error=%s", platform.value, error)
        return None

    if data is None:
        return None

    title = _clean_string(data.get("title"))
    author = _clean_string(data.get("author_name"))
    if not (title and author):
        return None

    logger.info('oembed.found title="%s" author="%s"', title, author)
    return VideoMetadata(title=title, author=author)
