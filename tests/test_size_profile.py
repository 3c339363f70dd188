from google.protobuf import descriptor_pb2, descriptor_pool

from protoprofile.profile import profile_pb
from protoprofile.walker.size_profile import SizeProfileComputer


def walk(message):
    return SizeProfileComputer().compute(message.SerializeToString(), message.DESCRIPTOR)


def test_scalar_fields():
    samples = walk(profile_pb.ValueType(type=1, unit=2))
    assert samples == {
        ("ValueType", "#type", "int64"): [2],
        ("ValueType", "#unit", "int64"): [2],
        ("ValueType",): [0],
    }


def test_nested_message_accounts_its_header():
    message = profile_pb.Location(id=1, line=[profile_pb.Line(function_id=1)])
    samples = walk(message)

    assert samples == {
        ("Location", "#id", "uint64"): [2],
        ("Location", "#line", "Line", "#function_id", "uint64"): [2],
        ("Location", "#line", "Line"): [2],
        ("Location",): [0],
    }


def test_repeated_occurrences_share_a_path():
    message = profile_pb.Profile(sample_type=[profile_pb.ValueType(type=1, unit=2),
                                              profile_pb.ValueType(type=3, unit=4)])
    samples = walk(message)

    assert samples[("Profile", "#sample_type", "ValueType")] == [2, 2]
    assert samples[("Profile", "#sample_type", "ValueType", "#type", "int64")] == [2, 2]
    assert samples[("Profile", "#sample_type", "ValueType", "#unit", "int64")] == [2, 2]


def test_every_byte_is_blamed_once():
    message = profile_pb.Profile(
        sample=[profile_pb.Sample(location_id=[1, 2, 3], value=[10, 300])],
        location=[profile_pb.Location(id=1, line=[profile_pb.Line(function_id=1)])],
        string_table=["", "protos", "count"],
        period=7,
    )
    data = message.SerializeToString()
    samples = SizeProfileComputer().compute(data, message.DESCRIPTOR)

    assert sum(sum(sizes) for sizes in samples.values()) == len(data)


def test_packed_repeated_field_is_one_sample():
    samples = walk(profile_pb.Sample(location_id=[1, 2, 3]))
    assert samples[("Sample", "#location_id", "uint64")] == [5]


def test_unknown_fields_are_grouped():
    # field 99, varint 1
    data = bytes([0x98, 0x06, 0x01]) + profile_pb.ValueType(type=1).SerializeToString()
    samples = SizeProfileComputer().compute(data, profile_pb.ValueType.DESCRIPTOR)

    assert samples[("ValueType", "#:unknown:")] == [3]
    assert samples[("ValueType", "#type", "int64")] == [2]
    assert samples[("ValueType",)] == [0]


def test_truncated_data_becomes_overhead():
    samples = SizeProfileComputer().compute(b"\x08", profile_pb.ValueType.DESCRIPTOR)
    assert samples == {("ValueType",): [1]}


def test_every_list_is_non_empty():
    message = profile_pb.Profile(function=[profile_pb.Function(id=1, name=2)], comment=[1, 2])
    samples = walk(message)
    assert samples
    assert all(sizes for sizes in samples.values())


def test_empty_message():
    samples = SizeProfileComputer().compute(b"", profile_pb.Profile.DESCRIPTOR)
    assert samples == {("Profile",): [0]}


def node_descriptor():
    # message Node { optional Node child = 1; }
    file_proto = descriptor_pb2.FileDescriptorProto(name="node.proto", package="demo")
    node = file_proto.message_type.add(name="Node")
    node.field.add(name="child", number=1, type=descriptor_pb2.FieldDescriptorProto.TYPE_MESSAGE,
                   label=descriptor_pb2.FieldDescriptorProto.LABEL_OPTIONAL, type_name=".demo.Node")
    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(file_proto.SerializeToString())
    return pool.FindMessageTypeByName("demo.Node")


def encode_varint(value):
    out = bytearray()
    while value > 0x7F:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def test_deeply_nested_message():
    depth = 1200
    data = b""
    for _ in range(depth):
        data = b"\x0a" + encode_varint(len(data)) + data

    samples = SizeProfileComputer().compute(data, node_descriptor())

    assert len(samples) == depth + 1
    assert max(len(path) for path in samples) == 1 + 2 * depth
    assert samples[("Node",)] == [0]
    assert sum(sum(sizes) for sizes in samples.values()) == len(data)


def test_truncated_nested_message_keeps_parent_path():
    # Location { line: <truncated varint> id: 1 }
    data = b"\x22\x01\x08" + b"\x08\x01"
    samples = SizeProfileComputer().compute(data, profile_pb.Location.DESCRIPTOR)

    assert samples == {
        ("Location", "#line", "Line"): [3],
        ("Location", "#id", "uint64"): [2],
        ("Location",): [0],
    }
