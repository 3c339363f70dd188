from protoprofile.profile.interning import LocationInterner, StringInterner


def test_empty_string_interned_first_gets_zero():
    strings = StringInterner()
    assert strings.intern("") == 0
    assert strings.intern("protos") == 1
    assert strings.intern("") == 0


def test_string_ids_are_stable_and_distinct():
    strings = StringInterner()
    strings.intern("")
    ids = [strings.intern(text) for text in ["a", "b", "a", "c", "b"]]

    assert ids == [1, 2, 1, 3, 2]
    assert strings.strings == ["", "a", "b", "c"]
    assert len(strings) == 4


def test_strings_snapshot_is_a_copy():
    strings = StringInterner()
    strings.intern("")
    snapshot = strings.strings
    strings.intern("late")

    assert snapshot == [""]
    assert strings.strings == ["", "late"]


def test_location_ids_start_at_one():
    locations = LocationInterner()
    assert locations.intern("#packet") == 1
    assert locations.intern("Trace") == 2
    assert locations.intern("#packet") == 1
    assert list(locations.items()) == [("#packet", 1), ("Trace", 2)]
    assert len(locations) == 2


def test_location_ids_never_zero_and_increasing():
    locations = LocationInterner()
    ids = [locations.intern(f"field_{i % 7}") for i in range(30)]

    assert 0 not in ids
    first_seen = []
    for location_id in ids:
        if location_id not in first_seen:
            first_seen.append(location_id)
    assert first_seen == list(range(1, 8))


def test_tables_are_independent():
    strings = StringInterner()
    locations = LocationInterner()
    strings.intern("")

    assert strings.intern("x") == 1
    assert locations.intern("x") == 1
    assert locations.intern("y") == 2
    assert strings.strings == ["", "x"]
