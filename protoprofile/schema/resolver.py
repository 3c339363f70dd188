# coding=utf-8
"""
Description:
FileName：resolver.py
Notes:
    Resolves a message descriptor from .proto sources at runtime. The
    sources are compiled by the protoc bundled with grpcio-tools into a
    FileDescriptorSet, which is then loaded into a private descriptor pool.
    protoc reports syntax errors as ``file:line:column: message`` on stderr.

"""
import os
import tempfile
from importlib import resources
from typing import List, Optional, Sequence

from google.protobuf import descriptor_pb2, descriptor_pool
from google.protobuf.descriptor import Descriptor
from grpc_tools import protoc

from protoprofile.util.logging_utils import get_default_logger
from protoprofile.util.utils import SchemaResolutionError

logger = get_default_logger(__name__)


def _well_known_protos_dir() -> str:
    return str(resources.files("grpc_tools") / "_proto")


def compile_descriptor_set(proto_file: str, include_dirs: Sequence[str]) -> descriptor_pb2.FileDescriptorSet:
    if not os.path.isfile(proto_file):
        raise SchemaResolutionError(f"Could not find schema source ({proto_file})")

    include_args = [f"-I{d}" for d in include_dirs]
    include_args.append(f"-I{_well_known_protos_dir()}")
    with tempfile.TemporaryDirectory(prefix="protoprofile_") as tmp_dir:
        descriptor_set_path = os.path.join(tmp_dir, "descriptor_set.pb")
        args = ["grpc_tools.protoc", *include_args,
                f"--descriptor_set_out={descriptor_set_path}", "--include_imports", proto_file]
        logger.debug(f"running protoc: {' '.join(args[1:])}")
        return_code = protoc.main(args)
        if return_code != 0:
            raise SchemaResolutionError(f"Could not parse {proto_file} (protoc exited with {return_code})")
        with open(descriptor_set_path, "rb") as f:
            return descriptor_pb2.FileDescriptorSet.FromString(f.read())


def load_descriptor_set(descriptor_set: descriptor_pb2.FileDescriptorSet) -> descriptor_pool.DescriptorPool:
    pool = descriptor_pool.DescriptorPool()
    # --include_imports emits dependencies before their dependents.
    for file_proto in descriptor_set.file:
        pool.AddSerializedFile(file_proto.SerializeToString())
    return pool


def _default_root_message(file_proto: descriptor_pb2.FileDescriptorProto) -> Optional[str]:
    if not file_proto.message_type:
        return None
    name = file_proto.message_type[0].name
    return f"{file_proto.package}.{name}" if file_proto.package else name


def find_root_descriptor(descriptor_set: descriptor_pb2.FileDescriptorSet,
                         root_message: Optional[str] = None) -> Descriptor:
    if not descriptor_set.file:
        raise SchemaResolutionError("descriptor set is empty")

    pool = load_descriptor_set(descriptor_set)
    root_file = descriptor_set.file[-1]
    full_name = root_message or _default_root_message(root_file)
    if not full_name:
        raise SchemaResolutionError(f"{root_file.name} declares no message type")
    try:
        return pool.FindMessageTypeByName(full_name)
    except KeyError as e:
        raise SchemaResolutionError(f"message {full_name} not found in {root_file.name}") from e


def resolve_root_descriptor(proto_file: str, include_dirs: Optional[List[str]] = None,
                            root_message: Optional[str] = None) -> Descriptor:
    descriptor_set = compile_descriptor_set(proto_file, include_dirs or ["."])
    descriptor = find_root_descriptor(descriptor_set, root_message)
    logger.info(f"resolved root message {descriptor.full_name} from {proto_file}")
    return descriptor
