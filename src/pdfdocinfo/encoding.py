# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Output text encoding for metadata values."""

import codecs
import logging
from collections.abc import Iterable
from typing import Protocol

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TEXT_ENCODING = "utf-8"


class EncodingTable(Protocol):
    """Maps a Unicode code point to the bytes of the output encoding."""

    def map_codepoint(self, codepoint: int) -> bytes: ...


class CodecEncodingTable:
    """Encoding table backed by a Python codec.

    Code points the codec cannot represent map to an empty byte string.
    Characters are fed through one incremental encoder, so a byte order
    mark is never written and stateful codecs keep their shift state.

    Args:
        name: Codec name, e.g. ``"utf-8"`` or ``"latin-1"``.

    Raises:
        ConfigurationError: If the codec is unknown or not a text encoding.
    """

    def __init__(self, name: str = DEFAULT_TEXT_ENCODING) -> None:
        try:
            info = codecs.lookup(name)
        except LookupError as e:
            raise ConfigurationError(f"Unknown text encoding: {name}") from e
        if not getattr(info, "_is_text_encoding", True):
            raise ConfigurationError(f"Not a text encoding: {name}")

        self.name = info.name
        self._encoder = info.incrementalencoder(errors="ignore")
        # Swallow the byte order mark of utf-16/utf-32/utf-8-sig
        self._encoder.encode("")

    def map_codepoint(self, codepoint: int) -> bytes:
        return self._encoder.encode(chr(codepoint))

    def __repr__(self) -> str:
        return f"CodecEncodingTable({self.name!r})"


def reencode(decoded: Iterable[int] | str, table: EncodingTable) -> bytes:
    """Maps a sequence of code points through an encoding table.

    Args:
        decoded: Code points, or a string whose characters are used.
        table: Target encoding table.

    Returns:
        Concatenated output bytes, in input order.
    """
    if isinstance(decoded, str):
        decoded = (ord(ch) for ch in decoded)
    return b"".join(table.map_codepoint(cp) for cp in decoded)
