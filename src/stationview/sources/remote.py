from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from stationview.domain.record import WeatherRecord
from stationview.sources.decoders import Decoder, JsonArrayDecoder
from stationview.sources.parser import WeatherRecordParser
from stationview.sources.transports import (
    FsFileTransport,
    Transport,
    UrlTransport,
    with_query,
)

logger = logging.getLogger(__name__)


class SeriesSource(ABC):
    """Where the controller gets its history from.

    ``fetch`` blocks; the controller runs it off the event loop.
    """

    @abstractmethod
    def fetch(self, temperature_unit: str, pressure_unit: str) -> list[WeatherRecord]:
        pass


class _DecodingSource(SeriesSource):
    def __init__(
        self,
        *,
        decoder: Optional[Decoder] = None,
        parser: Optional[WeatherRecordParser] = None,
    ) -> None:
        self.decoder = decoder or JsonArrayDecoder()
        self.parser = parser or WeatherRecordParser()

    @abstractmethod
    def transport(self, temperature_unit: str, pressure_unit: str) -> Transport:
        pass

    def fetch(self, temperature_unit: str, pressure_unit: str) -> list[WeatherRecord]:
        transport = self.transport(temperature_unit, pressure_unit)
        rows = self.decoder.decode(transport.stream())
        records = [self.parser.parse(row) for row in rows]
        logger.debug("fetched %d records from %s", len(records), self)
        return records


class RemoteSeriesSource(_DecodingSource):
    """The station's usage endpoint, queried with the wanted units."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = 30.0,
        headers: Optional[dict[str, str]] = None,
        decoder: Optional[Decoder] = None,
        parser: Optional[WeatherRecordParser] = None,
    ) -> None:
        super().__init__(decoder=decoder, parser=parser)
        self.url = url
        self.timeout = timeout
        self.headers = dict(headers or {})

    def request_url(self, temperature_unit: str, pressure_unit: str) -> str:
        return with_query(
            self.url,
            {"temperature": temperature_unit, "pressure": pressure_unit},
        )

    def transport(self, temperature_unit: str, pressure_unit: str) -> Transport:
        return UrlTransport(
            self.request_url(temperature_unit, pressure_unit),
            headers=self.headers,
            timeout=self.timeout,
        )

    def __repr__(self) -> str:
        return f"RemoteSeriesSource({self.url!r})"


class FileSeriesSource(_DecodingSource):
    """A saved response body on disk.

    The file already holds values in some units; the requested units are only
    recorded, not applied.
    """

    def __init__(
        self,
        path: str,
        *,
        decoder: Optional[Decoder] = None,
        parser: Optional[WeatherRecordParser] = None,
    ) -> None:
        super().__init__(decoder=decoder, parser=parser)
        self.path = str(path)

    def transport(self, temperature_unit: str, pressure_unit: str) -> Transport:
        return FsFileTransport(self.path)

    def __repr__(self) -> str:
        return f"FileSeriesSource({self.path!r})"
