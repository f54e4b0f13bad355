"""Tests for UUIDv7 generation."""

import uuid

import flock_commons.utils.uuid as uuid_utils
from flock_commons.utils import generate_uuid_v7


class TestGenerateUuidV7:
    def test_version_and_variant(self):
        value = uuid.UUID(generate_uuid_v7())

        assert value.version == 7
        assert value.variant == uuid.RFC_4122

    def test_timestamp_occupies_leading_48_bits(self, monkeypatch):
        unix_ms = 1_792_281_600_123
        monkeypatch.setattr(uuid_utils.time, "time_ns", lambda: unix_ms * 1_000_000 + 999)

        value = uuid.UUID(generate_uuid_v7())

        assert value.int >> 80 == unix_ms
        assert str(value).startswith(f"{unix_ms:012x}"[:8] + "-" + f"{unix_ms:012x}"[8:])

    def test_later_ids_sort_after_earlier_ones(self, monkeypatch):
        clock = iter([1_000_000_000_000, 1_000_000_001_000])
        monkeypatch.setattr(uuid_utils.time, "time_ns", lambda: next(clock) * 1_000_000)

        first = generate_uuid_v7()
        second = generate_uuid_v7()

        assert first < second

    def test_ids_are_unique(self):
        assert len({generate_uuid_v7() for _ in range(500)}) == 500
