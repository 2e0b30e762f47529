from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from http.client import HTTPException
from typing import Dict, Iterator, Mapping, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode, urlsplit, urlunsplit
from urllib.request import Request, urlopen

from stationview.errors import FetchError

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Abstract transport that yields the raw bytes of one response."""

    @abstractmethod
    def stream(self) -> Iterator[bytes]:
        pass


class FsFileTransport(Transport):
    def __init__(self, path: str, *, chunk_size: int = 65536):
        self.path = path
        self.chunk_size = chunk_size

    def stream(self) -> Iterator[bytes]:
        try:
            f = open(self.path, "rb")
        except OSError as e:
            raise FetchError(f"failed to read {self.path}: {e}") from e
        with f:
            while True:
                try:
                    chunk = f.read(self.chunk_size)
                except OSError as e:
                    raise FetchError(f"failed to read {self.path}: {e}") from e
                if not chunk:
                    break
                yield chunk


def with_query(url: str, params: Mapping[str, str]) -> str:
    """Append ``params`` to ``url``, keeping any query it already carries."""
    parts = urlsplit(url)
    extra = urlencode(params)
    query = f"{parts.query}&{extra}" if parts.query else extra
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


class UrlTransport(Transport):
    def __init__(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        *,
        timeout: float | None = None,
        chunk_size: int = 64 * 1024,
    ):
        self.url = url
        self.headers = dict(headers or {})
        self.timeout = timeout
        self.chunk_size = chunk_size

    def _open(self):
        req = Request(self.url, headers=self.headers)
        try:
            if self.timeout is None:
                return urlopen(req)
            return urlopen(req, timeout=self.timeout)
        except HTTPError as e:
            logger.warning("fetch %s answered %s", self.url, e.code)
            raise FetchError(f"failed to fetch {self.url}: HTTP {e.code}") from e
        except (URLError, OSError) as e:
            raise FetchError(f"failed to fetch {self.url}: {e}") from e

    def stream(self) -> Iterator[bytes]:
        resp = self._open()
        with resp:
            status = getattr(resp, "status", 200)
            if status != 200:
                logger.warning("fetch %s answered %s", self.url, status)
                raise FetchError(f"failed to fetch {self.url}: HTTP {status}")
            while True:
                try:
                    chunk = resp.read(self.chunk_size)
                except (OSError, HTTPException) as e:
                    raise FetchError(f"failed to fetch {self.url}: {e}") from e
                if not chunk:
                    break
                yield chunk

