# coding=utf-8
"""
Description:
FileName：pprof_computer.py
Notes:
    Turns the per field path size samples of one message into a pprof
    profile. Samples are associated with locations which in turn are
    associated with functions; field names are not distinguished further, so
    locations and functions are mapped 1:1 and share their id.

"""
from typing import Callable, Optional

from google.protobuf.descriptor import Descriptor

from protoprofile.profile import profile_pb
from protoprofile.profile.aggregator import SAMPLE_VALUE_TYPES, FieldPath, SampleSet, aggregate
from protoprofile.profile.interning import LocationInterner, StringInterner
from protoprofile.util.logging_utils import get_default_logger
from protoprofile.util.utils import InvariantViolation
from protoprofile.walker.size_profile import SizeProfileComputer

logger = get_default_logger(__name__)

Walker = Callable[[bytes, Descriptor], SampleSet]


class ProfileAssembler:
    """Owns the interning tables and the profile of a single computation."""

    def __init__(self):
        self.strings = StringInterner()
        self.locations = LocationInterner()
        self.profile = profile_pb.Profile()
        if self.strings.intern("") != 0:
            raise InvariantViolation("empty string must be interned with id 0")

    def assemble(self, samples: SampleSet):
        self._emit_sample_types()
        self._emit_samples(samples)
        self._emit_locations()
        # Function names were interned by the previous phase.
        self._emit_string_table()
        return self.profile

    def _emit_sample_types(self):
        for type_name, unit in SAMPLE_VALUE_TYPES:
            sample_type = self.profile.sample_type.add()
            sample_type.type = self.strings.intern(type_name)
            sample_type.unit = self.strings.intern(unit)

    def _emit_samples(self, samples: SampleSet):
        for field_path, values in aggregate(samples):
            sample = self.profile.sample.add()
            sample.location_id.extend(self._location_stack(field_path))
            # SampleValues iterates in the order of SAMPLE_VALUE_TYPES.
            sample.value.extend(values)

    def _location_stack(self, field_path: FieldPath):
        return [self.locations.intern(name) for name in reversed(field_path)]

    def _emit_locations(self):
        for field_name, location_id in self.locations.items():
            location = self.profile.location.add()
            location.id = location_id
            location.line.add(function_id=location_id)

            function = self.profile.function.add()
            function.id = location_id
            function.name = self.strings.intern(field_name)

    def _emit_string_table(self):
        self.profile.string_table.extend(self.strings.strings)


class PprofProfileComputer:
    def __init__(self, walker: Optional[Walker] = None):
        self._walker = walker or SizeProfileComputer().compute

    def compute(self, data: bytes, descriptor: Descriptor) -> bytes:
        samples = self._walker(data, descriptor)
        logger.info(f"collected {len(samples)} field paths from {len(data)} bytes of {descriptor.full_name}")
        return self.serialize(samples)

    def serialize(self, samples: SampleSet) -> bytes:
        return self.build_profile(samples).SerializeToString()

    @staticmethod
    def build_profile(samples: SampleSet):
        profile = ProfileAssembler().assemble(samples)
        logger.debug(f"profile has {len(profile.sample)} samples, {len(profile.location)} locations, "
                     f"{len(profile.string_table)} strings")
        return profile
