# coding=utf-8
"""
Description:
FileName：profile_pb.py
Notes:
    Message classes of the pprof ``perftools.profiles`` schema, built from a
    FileDescriptorProto at import time so no generated ``profile_pb2`` has to be
    shipped. Only the messages this tool writes or tests read are declared;
    field numbers follow upstream profile.proto.

"""
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "perftools.profiles"

_Field = descriptor_pb2.FieldDescriptorProto

_MESSAGES = {
    "Profile": [
        ("sample_type", 1, _Field.TYPE_MESSAGE, _Field.LABEL_REPEATED, "ValueType"),
        ("sample", 2, _Field.TYPE_MESSAGE, _Field.LABEL_REPEATED, "Sample"),
        ("location", 4, _Field.TYPE_MESSAGE, _Field.LABEL_REPEATED, "Location"),
        ("function", 5, _Field.TYPE_MESSAGE, _Field.LABEL_REPEATED, "Function"),
        ("string_table", 6, _Field.TYPE_STRING, _Field.LABEL_REPEATED, None),
        ("drop_frames", 7, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("keep_frames", 8, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("time_nanos", 9, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("duration_nanos", 10, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("period_type", 11, _Field.TYPE_MESSAGE, _Field.LABEL_OPTIONAL, "ValueType"),
        ("period", 12, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("comment", 13, _Field.TYPE_INT64, _Field.LABEL_REPEATED, None),
        ("default_sample_type", 14, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
    ],
    "ValueType": [
        ("type", 1, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("unit", 2, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
    ],
    "Sample": [
        ("location_id", 1, _Field.TYPE_UINT64, _Field.LABEL_REPEATED, None),
        ("value", 2, _Field.TYPE_INT64, _Field.LABEL_REPEATED, None),
        ("label", 3, _Field.TYPE_MESSAGE, _Field.LABEL_REPEATED, "Label"),
    ],
    "Label": [
        ("key", 1, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("str", 2, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("num", 3, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("num_unit", 4, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
    ],
    "Location": [
        ("id", 1, _Field.TYPE_UINT64, _Field.LABEL_OPTIONAL, None),
        ("mapping_id", 2, _Field.TYPE_UINT64, _Field.LABEL_OPTIONAL, None),
        ("address", 3, _Field.TYPE_UINT64, _Field.LABEL_OPTIONAL, None),
        ("line", 4, _Field.TYPE_MESSAGE, _Field.LABEL_REPEATED, "Line"),
        ("is_folded", 5, _Field.TYPE_BOOL, _Field.LABEL_OPTIONAL, None),
    ],
    "Line": [
        ("function_id", 1, _Field.TYPE_UINT64, _Field.LABEL_OPTIONAL, None),
        ("line", 2, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("column", 3, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
    ],
    "Function": [
        ("id", 1, _Field.TYPE_UINT64, _Field.LABEL_OPTIONAL, None),
        ("name", 2, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("system_name", 3, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("filename", 4, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
        ("start_line", 5, _Field.TYPE_INT64, _Field.LABEL_OPTIONAL, None),
    ],
}


def _build_file_descriptor():
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="protoprofile/profile.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for message_name, fields in _MESSAGES.items():
        message_proto = file_proto.message_type.add(name=message_name)
        for name, number, field_type, label, type_name in fields:
            field = message_proto.field.add(name=name, number=number, type=field_type, label=label)
            if type_name:
                field.type_name = f".{PACKAGE}.{type_name}"
    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(file_proto.SerializeToString())
    return pool.FindFileByName(file_proto.name)


_FILE_DESCRIPTOR = _build_file_descriptor()


def _message_class(name):
    return message_factory.GetMessageClass(_FILE_DESCRIPTOR.message_types_by_name[name])


Profile = _message_class("Profile")
ValueType = _message_class("ValueType")
Sample = _message_class("Sample")
Location = _message_class("Location")
Line = _message_class("Line")
Function = _message_class("Function")
