# coding=utf-8
"""
Description:
FileName：constant.py
Notes: runtime settings, each overridable through the environment.

"""
import os
from typing import List, Optional

DEFAULT_PROTO_PATH = "protos/perfetto/trace/trace.proto"

PROTO_PATH = os.getenv("PROTOPROFILE_PROTO", DEFAULT_PROTO_PATH)
PROTO_INCLUDE_DIRS: List[str] = [d for d in os.getenv("PROTOPROFILE_PROTO_PATH", ".").split(os.pathsep) if d]
ROOT_MESSAGE: Optional[str] = os.getenv("PROTOPROFILE_ROOT_MESSAGE") or None

GZIP_OUTPUT = os.getenv("PROTOPROFILE_GZIP", "0").lower() in ("1", "true", "yes")
SUMMARY_CSV_PATH: Optional[str] = os.getenv("PROTOPROFILE_SUMMARY_CSV") or None
SUMMARY_TOP_N = 10

OUTPUT_FILE_MODE = 0o600

USAGE = "Usage: {prog} INPUT_PATH OUTPUT_PATH"


class ValueTypeName:
    count = "protos"
    max_size = "max_size"
    min_size = "min_size"
    median = "median"
    total_size = "total_size"


class Unit:
    count = "count"
    bytes = "bytes"


class PathToken:
    field_prefix = "#"
    unknown = "#:unknown:"
