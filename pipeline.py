"""Query translation and response reshaping for the upstream music API.

The caller sends ``?name=Artist-Title``; upstream expects ``msg``, ``type``,
``br`` and ``n``. Upstream answers with ``{"code": ..., "data": {...}}``
which is flattened into a fixed set of string fields.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urlencode

import requests

from errors import NetworkFailure, UpstreamHTTPError, UpstreamParseError
from logging_setup import get_logger
from settings import ProxyConfig

logger = get_logger(__name__)

# output field -> field inside upstream "data"
RESULT_FIELDS = {
    "title": "title",
    "singer": "singer",
    "cover": "cover",
    "link": "link",
    "music_url": "music_url",
    "lyric": "lrc_url",
}


def normalize_params(inbound: Mapping[str, str]) -> dict[str, str]:
    """Rewrite caller parameters into the upstream parameter set.

    The input is not modified. Applying this to its own output returns an
    equal mapping.
    """
    params = dict(inbound)

    params["type"] = "json"
    if "br" not in params:
        params["br"] = "1"
    # exactly one candidate, whatever the caller asked for
    params["n"] = "1"

    if "name" in params:
        params["msg"] = params.pop("name")

    return params


def normalize_response(payload) -> dict:
    """Map a parsed upstream body to the flat result record.

    Bodies whose ``code`` is present and not 200 are upstream domain errors
    and are returned unchanged.
    """
    if not isinstance(payload, dict):
        raise UpstreamParseError(f"expected a JSON object, got {type(payload).__name__}")

    if "code" in payload and payload["code"] != 200:
        return payload

    data = payload.get("data")
    if not isinstance(data, dict):
        data = {}

    code = payload.get("code")
    result = {"code": 200 if code is None else code}
    for field, source in RESULT_FIELDS.items():
        value = data.get(source)
        result[field] = "" if value is None else value
    return result


class MusicProxy:
    def __init__(self, config: ProxyConfig | None = None):
        self.config = config or ProxyConfig()

    def build_url(self, upstream_query: Mapping[str, str]) -> str:
        return self.config.base_url + "?" + urlencode(upstream_query)

    def fetch(self, upstream_query: Mapping[str, str]) -> requests.Response:
        """Issue the single upstream GET. Raises on network or HTTP failure."""
        url = self.build_url(upstream_query)
        logger.debug("upstream_request", url=url)
        try:
            response = requests.get(
                url,
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise NetworkFailure(str(e)) from e

        if not 200 <= response.status_code < 300:
            raise UpstreamHTTPError(response.status_code)
        return response

    def search(self, inbound: Mapping[str, str]) -> dict:
        response = self.fetch(normalize_params(inbound))
        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamParseError(str(e)) from e
        return normalize_response(payload)
