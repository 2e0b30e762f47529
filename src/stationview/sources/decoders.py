import codecs
import json
from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator

from stationview.errors import FetchError


class Decoder(ABC):
    @abstractmethod
    def decode(self, chunks: Iterable[bytes]) -> Iterator[Any]:
        pass


def _read_all_text(chunks: Iterable[bytes], encoding: str) -> str:
    decoder = codecs.getincrementaldecoder(encoding)()
    parts: list[str] = []
    for chunk in chunks:
        parts.append(decoder.decode(chunk))
    parts.append(decoder.decode(b"", final=True))
    return "".join(parts)


class JsonArrayDecoder(Decoder):
    """Decode a JSON document whose rows live in a top-level array."""

    def __init__(self, *, encoding: str = "utf-8"):
        self.encoding = encoding

    def decode(self, chunks: Iterable[bytes]) -> Iterator[Any]:
        try:
            text = _read_all_text(chunks, self.encoding)
            data = json.loads(text)
        except (UnicodeDecodeError, ValueError) as e:
            raise FetchError(f"malformed JSON response: {e}") from e
        if not isinstance(data, list):
            raise FetchError(
                f"expected a JSON array of records, got {type(data).__name__}"
            )
        yield from data
