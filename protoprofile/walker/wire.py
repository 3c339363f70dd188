# coding=utf-8
"""
Description:
FileName：wire.py
Notes: protobuf wire format primitives, just enough to split a buffer into fields.

"""
from dataclasses import dataclass
from typing import Iterator, Tuple

from protoprofile.util.utils import WireFormatError

# Protobuf wire types
WT_VARINT = 0
WT_FIXED64 = 1
WT_LEN = 2
WT_START_GROUP = 3
WT_END_GROUP = 4
WT_FIXED32 = 5

MAX_VARINT_BYTES = 10


@dataclass
class WireField:
    field_no: int
    wire_type: int
    start: int
    data_start: int
    end: int

    @property
    def size(self) -> int:
        """Encoded size of the whole field: tag, length prefix and payload."""
        return self.end - self.start


def read_varint(buf: bytes, i: int, end: int) -> Tuple[int, int]:
    shift = 0
    out = 0
    for _ in range(MAX_VARINT_BYTES):
        if i >= end:
            raise WireFormatError("truncated varint")
        b = buf[i]
        i += 1
        out |= (b & 0x7F) << shift
        if (b & 0x80) == 0:
            return out, i
        shift += 7
    raise WireFormatError("varint too long")


def read_field(buf: bytes, start: int, end: int) -> WireField:
    tag, i = read_varint(buf, start, end)
    field_no = tag >> 3
    wire_type = tag & 0x7
    if field_no == 0:
        raise WireFormatError(f"invalid field number 0 at {start}")

    if wire_type == WT_VARINT:
        _, field_end = read_varint(buf, i, end)
        return WireField(field_no, wire_type, start, i, field_end)
    if wire_type == WT_FIXED64:
        width = 8
    elif wire_type == WT_FIXED32:
        width = 4
    elif wire_type == WT_LEN:
        width, i = read_varint(buf, i, end)
    else:
        raise WireFormatError(f"unsupported wire type {wire_type} at {start}")

    if i + width > end:
        raise WireFormatError(f"truncated field {field_no} at {start}")
    return WireField(field_no, wire_type, start, i, i + width)


def iter_fields(buf: bytes, start: int = 0, end: int = None) -> Iterator[WireField]:
    if end is None:
        end = len(buf)
    i = start
    while i < end:
        field = read_field(buf, i, end)
        yield field
        i = field.end
