# coding=utf-8
"""
Description:
FileName：size_profile.py
Notes:
    Walks a serialized message against its descriptor and records, for every
    field path, the encoded size of each occurrence.

    A path starts with the root message type name; each field adds
    ``#<field name>`` followed by the nested message type name, or by the
    scalar type name for leaf fields. Bytes of a message that are not blamed
    on any field are recorded at the message's own path, so for any message
    the child samples plus its overhead sample add up to its encoded size.

"""
from collections import defaultdict
from typing import Dict, Iterator, List, Tuple

from google.protobuf.descriptor import Descriptor, FieldDescriptor

from protoprofile.util.constant import PathToken
from protoprofile.util.logging_utils import get_default_logger
from protoprofile.util.utils import WireFormatError
from protoprofile.walker.wire import WT_LEN, WireField, iter_fields

logger = get_default_logger(__name__)

TYPE_NAMES = {
    FieldDescriptor.TYPE_DOUBLE: "double",
    FieldDescriptor.TYPE_FLOAT: "float",
    FieldDescriptor.TYPE_INT64: "int64",
    FieldDescriptor.TYPE_UINT64: "uint64",
    FieldDescriptor.TYPE_INT32: "int32",
    FieldDescriptor.TYPE_FIXED64: "fixed64",
    FieldDescriptor.TYPE_FIXED32: "fixed32",
    FieldDescriptor.TYPE_BOOL: "bool",
    FieldDescriptor.TYPE_STRING: "string",
    FieldDescriptor.TYPE_GROUP: "group",
    FieldDescriptor.TYPE_MESSAGE: "message",
    FieldDescriptor.TYPE_BYTES: "bytes",
    FieldDescriptor.TYPE_UINT32: "uint32",
    FieldDescriptor.TYPE_ENUM: "enum",
    FieldDescriptor.TYPE_SFIXED32: "sfixed32",
    FieldDescriptor.TYPE_SFIXED64: "sfixed64",
    FieldDescriptor.TYPE_SINT32: "sint32",
    FieldDescriptor.TYPE_SINT64: "sint64",
}


class SizeProfileComputer:
    def __init__(self):
        self._stack: List[str] = []
        self._samples: Dict[Tuple[str, ...], List[int]] = defaultdict(list)

    def compute(self, data: bytes, descriptor: Descriptor) -> Dict[Tuple[str, ...], List[int]]:
        self._stack = []
        self._samples = defaultdict(list)
        self._compute_inner(data, 0, len(data), descriptor, len(data))
        return dict(self._samples)

    def _sample(self, size: int):
        self._samples[tuple(self._stack)].append(size)

    def _compute_inner(self, buf: bytes, start: int, end: int, descriptor: Descriptor, accounted_size: int):
        """
        Record the fields of the message stored in ``buf[start:end]``.

        Nested messages are walked with an explicit stack of frames so the
        nesting depth is not bounded by the interpreter's recursion limit.
        ``accounted_size`` of a frame is what its parent blamed on it, i.e.
        the payload plus the tag and length prefix for nested messages.
        """
        self._stack.append(descriptor.name)
        frames = [_Frame(descriptor, iter_fields(buf, start, end), accounted_size)]

        while frames:
            frame = frames[-1]
            try:
                field = next(frame.fields, None)
            except WireFormatError as e:
                logger.warning(f"stop decoding {frame.descriptor.full_name} at depth {len(frames)}: {e}")
                field = None

            if field is None:
                self._finish(frame)
                frames.pop()
                if frames:
                    # the parent's "#<field name>" entry
                    self._stack.pop()
                continue

            frame.overhead -= field.size
            field_descriptor = frame.descriptor.fields_by_number.get(field.field_no)
            if field_descriptor is None:
                frame.unknown += field.size
                continue

            self._stack.append(PathToken.field_prefix + field_descriptor.name)
            if field.wire_type == WT_LEN and field_descriptor.type == FieldDescriptor.TYPE_MESSAGE:
                message_type = field_descriptor.message_type
                self._stack.append(message_type.name)
                frames.append(_Frame(message_type, iter_fields(buf, field.data_start, field.end), field.size))
                continue

            self._stack.append(TYPE_NAMES.get(field_descriptor.type, "unknown"))
            self._sample(field.size)
            self._stack.pop()
            self._stack.pop()

    def _finish(self, frame: "_Frame"):
        if frame.unknown:
            self._stack.append(PathToken.unknown)
            self._sample(frame.unknown)
            self._stack.pop()

        self._sample(frame.overhead)
        self._stack.pop()


class _Frame:
    __slots__ = ("descriptor", "fields", "overhead", "unknown")

    def __init__(self, descriptor: Descriptor, fields: Iterator[WireField], overhead: int):
        self.descriptor = descriptor
        self.fields = fields
        self.overhead = overhead
        self.unknown = 0
