"""Request-like inputs."""

from vouch.http.request import ParsedRequest, RequestLike

__all__ = ["ParsedRequest", "RequestLike"]
