"""Exceptions raised by the music proxy pipeline.

Every error is terminal for the request; the HTTP layer renders it as
``{"code": <status>, "error_msg": <message>}``.
"""

from __future__ import annotations


class ProxyError(Exception):
    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"code": self.status_code, "error_msg": self.message}


class NetworkFailure(ProxyError):
    """DNS, connection or timeout error while talking to the upstream API."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"upstream request failed: network error {detail}")


class UpstreamHTTPError(ProxyError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, upstream_status: int) -> None:
        super().__init__(f"upstream request failed: HTTP status {upstream_status}")
        self.upstream_status = upstream_status


class UpstreamParseError(ProxyError):
    """Upstream body is not a JSON object."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"failed to parse upstream JSON: {detail}")
