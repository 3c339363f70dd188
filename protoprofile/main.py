# coding=utf-8
"""
Description:
FileName：main.py
Notes:
    protoprofile INPUT_PATH OUTPUT_PATH

    Reads one serialized message, resolves its schema from .proto sources and
    writes a pprof profile of the bytes used by every field path. Schema
    location and output options come from protoprofile.util.constant.

"""
import gzip
import os
import sys

from protoprofile.profile.pprof_computer import PprofProfileComputer
from protoprofile.report.summary import build_summary, log_top_paths, write_summary_csv
from protoprofile.schema.resolver import resolve_root_descriptor
from protoprofile.util import constant
from protoprofile.util.logging_utils import get_default_logger
from protoprofile.util.utils import SchemaResolutionError, cal_time
from protoprofile.walker.size_profile import SizeProfileComputer

logger = get_default_logger(__name__)


def print_usage(prog):
    print(constant.USAGE.format(prog=os.path.basename(prog)), file=sys.stderr)
    return 1


def open_output(output_path):
    fd = os.open(output_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, constant.OUTPUT_FILE_MODE)
    return os.fdopen(fd, "wb")


@cal_time(logger, "debug")
def compute_profile(data, descriptor):
    samples = {}

    def walker(buf, root_descriptor):
        # kept for the summary report
        samples.update(SizeProfileComputer().compute(buf, root_descriptor))
        return samples

    payload = PprofProfileComputer(walker=walker).compute(data, descriptor)
    if constant.GZIP_OUTPUT:
        payload = gzip.compress(payload)
    return samples, payload


def report(samples):
    summary = build_summary(samples)
    log_top_paths(summary, logger, constant.SUMMARY_TOP_N)
    if constant.SUMMARY_CSV_PATH:
        write_summary_csv(summary, constant.SUMMARY_CSV_PATH)
        logger.info(f"writing summary to {constant.SUMMARY_CSV_PATH}")


def main(argv=None):
    argv = sys.argv if argv is None else argv
    if len(argv) != 3:
        return print_usage(argv[0] if argv else "protoprofile")

    input_path, output_path = argv[1], argv[2]

    try:
        with open(input_path, "rb") as f:
            data = f.read()
    except OSError as e:
        logger.error(f"Could not open input path ({input_path}): {e}")
        return 1

    try:
        descriptor = resolve_root_descriptor(constant.PROTO_PATH, constant.PROTO_INCLUDE_DIRS,
                                             constant.ROOT_MESSAGE)
    except SchemaResolutionError as e:
        logger.error(f"Could not resolve root message: {e}")
        return 1

    try:
        output = open_output(output_path)
    except OSError as e:
        logger.error(f"Could not open output path ({output_path}): {e}")
        return 1

    with output:
        samples, payload = compute_profile(data, descriptor)
        try:
            output.write(payload)
            output.flush()
            os.fsync(output.fileno())
        except OSError as e:
            logger.error(f"Could not write output path ({output_path}): {e}")
            return 1

    logger.info(f"wrote {len(payload)} bytes to {output_path}")
    try:
        report(samples)
    except OSError as e:
        logger.error(f"Could not write summary path ({constant.SUMMARY_CSV_PATH}): {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
