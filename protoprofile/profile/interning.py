# coding=utf-8
"""
Description:
FileName：interning.py
Notes:
    Two independent interning tables. String IDs index the pprof string table
    and start at 0; location IDs start at 1 because pprof treats 0 as
    "no location". IDs from one table never mean anything in the other.

"""
from typing import Dict, Iterator, List, Tuple


class StringInterner:
    def __init__(self):
        self._strings: List[str] = []
        self._string_to_id: Dict[str, int] = {}

    def intern(self, text: str) -> int:
        string_id = self._string_to_id.get(text)
        if string_id is not None:
            return string_id
        self._strings.append(text)
        string_id = len(self._strings) - 1
        self._string_to_id[text] = string_id
        return string_id

    @property
    def strings(self) -> List[str]:
        """Interned strings in ID order; this is the output string table."""
        return list(self._strings)

    def __len__(self):
        return len(self._strings)


class LocationInterner:
    def __init__(self):
        self._locations: Dict[str, int] = {}

    def intern(self, field_name: str) -> int:
        location_id = self._locations.get(field_name)
        if location_id is not None:
            return location_id
        location_id = len(self._locations) + 1
        self._locations[field_name] = location_id
        return location_id

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(self._locations.items())

    def __len__(self):
        return len(self._locations)
