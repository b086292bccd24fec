"""Compact positional binary encoding (Borsh layout).

Conventions:
- Integers are little-endian and fixed width (u8, u32, u64, u128)
- Booleans are one byte (0x00 = False, 0x01 = True)
- Strings and byte vectors are prefixed with a u32 length
- Options are a tag byte (0 = None, 1 = Some) followed by the value
- Maps are a u32 count followed by entries sorted by key
- Fixed-size arrays (addresses) are written without a length prefix
"""

from __future__ import annotations

import struct
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, TypeVar

from ..exceptions import DecodingError, EncodingError
from ..utils import U32_MAX, to_u8, to_u64, to_u128

T = TypeVar("T")


class BorshSerializable(Protocol):
    def write_borsh(self, writer: BorshWriter) -> None: ...


class BorshWriter:
    """Append-only buffer producing Borsh bytes."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def write_u8(self, value: Any, field: str = "value") -> None:
        self._buf.extend(struct.pack("<B", to_u8(value, field)))

    def write_u32(self, value: int, field: str = "length") -> None:
        if not 0 <= value <= U32_MAX:
            raise EncodingError("Length exceeds u32 maximum", field=field, value=value)
        self._buf.extend(struct.pack("<I", value))

    def write_u64(self, value: Any, field: str = "value") -> None:
        self._buf.extend(struct.pack("<Q", to_u64(value, field)))

    def write_u128(self, value: Any, field: str = "amount") -> None:
        self._buf.extend(to_u128(value, field).to_bytes(16, "little", signed=False))

    def write_bool(self, value: bool, field: str = "flag") -> None:
        if not isinstance(value, bool):
            raise EncodingError("Expected a boolean", field=field, value=value)
        self._buf.append(1 if value else 0)

    def write_fixed(self, value: bytes, size: int, field: str = "data") -> None:
        if not isinstance(value, bytes | bytearray) or len(value) != size:
            raise EncodingError(f"{field} must be exactly {size} bytes", field=field, value=value)
        self._buf.extend(value)

    def write_bytes(self, value: bytes, field: str = "data") -> None:
        if not isinstance(value, bytes | bytearray):
            raise EncodingError(f"{field} must be bytes", field=field, value=value)
        self.write_u32(len(value), field)
        self._buf.extend(value)

    def write_string(self, value: str, field: str = "value") -> None:
        if not isinstance(value, str):
            raise EncodingError(f"{field} must be a string", field=field, value=value)
        try:
            data = value.encode("utf-8")
        except UnicodeEncodeError:
            raise EncodingError(
                f"{field} is not encodable as UTF-8", field=field, value=value
            ) from None
        self.write_u32(len(data), field)
        self._buf.extend(data)

    def write_option(self, value: T | None, write: Callable[[T], None]) -> None:
        if value is None:
            self._buf.append(0)
            return
        self._buf.append(1)
        write(value)

    def write_vec(self, items: Sequence[T], write: Callable[[T], None], field: str = "items") -> None:
        if isinstance(items, str | bytes) or not isinstance(items, Sequence):
            raise EncodingError(f"{field} must be a sequence", field=field, value=items)
        self.write_u32(len(items), field)
        for item in items:
            write(item)

    def write_map(
        self,
        entries: Mapping[str, Any],
        write_value: Callable[[Any], None],
        field: str = "entries",
    ) -> None:
        if not isinstance(entries, Mapping):
            raise EncodingError(f"{field} must be a mapping", field=field, value=entries)
        for key in entries:
            if not isinstance(key, str):
                raise EncodingError(f"{field} keys must be strings", field=field, value=key)
        self.write_u32(len(entries), field)
        for key in sorted(entries):
            self.write_string(key, field)
            write_value(entries[key])


class BorshReader:
    """Cursor over a Borsh payload; every read checks remaining length."""

    def __init__(self, data: bytes, expected: str) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._expected = expected

    def _fail(self, message: str) -> DecodingError:
        return DecodingError(
            message,
            expected=self._expected,
            raw=self._data,
            details={"offset": self._pos},
        )

    def _take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise self._fail(f"Truncated payload: need {size} bytes at offset {self._pos}")
        chunk = self._data[self._pos : end]
        self._pos = end
        return chunk

    def read_u8(self) -> int:
        return self._take(1)[0]

    def read_u32(self) -> int:
        return struct.unpack("<I", self._take(4))[0]

    def read_u64(self) -> int:
        return struct.unpack("<Q", self._take(8))[0]

    def read_u128(self) -> int:
        return int.from_bytes(self._take(16), "little", signed=False)

    def read_bool(self) -> bool:
        tag = self.read_u8()
        if tag not in (0, 1):
            raise self._fail(f"Invalid boolean byte {tag:#04x}")
        return tag == 1

    def read_fixed(self, size: int) -> bytes:
        return self._take(size)

    def read_bytes(self) -> bytes:
        return self._take(self.read_u32())

    def read_string(self) -> str:
        data = self.read_bytes()
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            raise self._fail("String is not valid UTF-8") from None

    def read_option(self, read: Callable[[], T]) -> T | None:
        tag = self.read_u8()
        if tag == 0:
            return None
        if tag != 1:
            raise self._fail(f"Invalid option tag {tag:#04x}")
        return read()

    def read_vec(self, read: Callable[[], T]) -> list[T]:
        return [read() for _ in range(self.read_u32())]

    def read_map(self, read_value: Callable[[], T]) -> dict[str, T]:
        result: dict[str, T] = {}
        for _ in range(self.read_u32()):
            key = self.read_string()
            result[key] = read_value()
        return result

    def finish(self) -> None:
        """Reject payloads with unread trailing bytes."""
        if self._pos != len(self._data):
            raise self._fail(f"{len(self._data) - self._pos} trailing bytes after payload")


def encode_binary(value: Any) -> bytes:
    """Encode a value implementing ``write_borsh`` into Borsh bytes."""
    write = getattr(value, "write_borsh", None)
    if write is None:
        raise EncodingError(
            f"Value of type {type(value).__name__} has no binary representation",
            field="args",
            value=value,
        )
    writer = BorshWriter()
    try:
        write(writer)
    except (TypeError, ValueError) as exc:
        raise EncodingError(
            "Value has no binary representation",
            field="args",
            value=value,
            details={"error": str(exc)},
        ) from exc
    return writer.getvalue()
