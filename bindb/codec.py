"""Whole-document encoding for bindb files."""

from typing import Any, Dict

import msgpack

from .exceptions import DecodeError, EncodeError


_INT_MIN = -(2**63)
_INT_MAX = 2**64 - 1


def _reject_ext(code: int, data: bytes) -> Any:
    raise DecodeError(f"Unsupported MessagePack extension type {code}")


class Codec:
    """Encode and decode a document to MessagePack bytes.

    Supported values are None, bool, int (64-bit), float, str, bytes,
    lists and string-keyed dicts. Tuples are written as lists and
    bytearray/memoryview as bytes; everything else is rejected before any
    bytes are produced. On decode, MessagePack timestamps become float
    seconds and other extension types are rejected.

    Example:
        codec = Codec()
        data = codec.encode({"users": [{"name": "ada", "avatar": b"\\x89PNG"}]})
        codec.decode(data)
        # {'users': [{'name': 'ada', 'avatar': b'\\x89PNG'}]}
    """

    def encode(self, document: Dict[str, Any]) -> bytes:
        """Serialize a document.

        Raises:
            EncodeError: If the document holds a value MessagePack cannot
                represent losslessly
        """
        if not isinstance(document, dict):
            raise EncodeError(
                f"Document must be a dict, got {type(document).__name__}"
            )
        wire = self.validate(document)
        try:
            return msgpack.packb(wire, use_bin_type=True)
        except (TypeError, ValueError, OverflowError) as e:
            raise EncodeError(f"Failed to encode document: {e}") from e

    def decode(self, data: bytes) -> Dict[str, Any]:
        """Deserialize a document. Empty input is an empty document.

        Raises:
            DecodeError: If data is malformed or does not hold a mapping
        """
        if not data:
            return {}
        try:
            document = msgpack.unpackb(
                data, raw=False, ext_hook=_reject_ext, timestamp=1
            )
        except (ValueError, msgpack.exceptions.UnpackException) as e:
            raise DecodeError(f"Failed to decode document: {e}") from e
        if not isinstance(document, dict):
            raise DecodeError(
                f"Encoded document is a {type(document).__name__}, not a mapping"
            )
        return document

    def validate(self, value: Any) -> Any:
        """Check that value can be encoded without writing anything.

        Returns:
            The value converted to MessagePack-native types

        Raises:
            EncodeError: If value holds something the codec cannot represent
        """
        return self._to_wire(value)

    def _to_wire(self, value: Any) -> Any:
        """Validate a value and convert it to MessagePack-native types."""
        if value is None or isinstance(value, (bool, float, str, bytes)):
            return value
        if isinstance(value, int):
            if not _INT_MIN <= value <= _INT_MAX:
                raise EncodeError(f"Integer out of 64-bit range: {value}")
            return value
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        if isinstance(value, (list, tuple)):
            return [self._to_wire(v) for v in value]
        if isinstance(value, dict):
            converted = {}
            for k, v in value.items():
                if not isinstance(k, str):
                    raise EncodeError(
                        f"Map keys must be str, got {type(k).__name__}: {k!r}"
                    )
                converted[k] = self._to_wire(v)
            return converted
        raise EncodeError(f"Cannot encode type: {type(value).__name__}")


__all__ = ["Codec"]
