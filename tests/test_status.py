"""
tests/test_status.py
────────────────────
Tests for the equipment status/type enums and the transition table.
"""
import itertools

import pytest

from minewatch.domain.errors import ValidationError
from minewatch.domain.status import (
    TRANSITIONS,
    EquipmentStatus,
    EquipmentType,
    allowed_transitions,
    can_transition,
    parse_equipment_status,
    parse_equipment_type,
)

S = EquipmentStatus

EXPECTED = {
    S.AVAILABLE: {S.OPERATING, S.MAINTENANCE, S.INACTIVE},
    S.OPERATING: {S.AVAILABLE, S.MAINTENANCE},
    S.MAINTENANCE: {S.AVAILABLE, S.INACTIVE},
    S.INACTIVE: {S.AVAILABLE, S.MAINTENANCE},
}


class TestTransitionTable:
    def test_covers_every_status(self):
        assert set(TRANSITIONS) == set(EquipmentStatus)

    def test_rows_match_expected(self):
        for current, targets in EXPECTED.items():
            assert allowed_transitions(current) == frozenset(targets)

    @pytest.mark.parametrize("current,target", list(itertools.product(EquipmentStatus, EquipmentStatus)))
    def test_can_transition_matches_table(self, current, target):
        assert can_transition(current, target) == (target in EXPECTED[current])

    @pytest.mark.parametrize("status", list(EquipmentStatus))
    def test_no_self_transitions(self, status):
        assert not can_transition(status, status)

    def test_available_reachable_from_every_other_state(self):
        for status in EquipmentStatus:
            if status != S.AVAILABLE:
                assert can_transition(status, S.AVAILABLE)

    def test_operating_to_inactive_is_illegal(self):
        assert not can_transition(S.OPERATING, S.INACTIVE)


class TestParsing:
    def test_parse_type_from_string(self):
        assert parse_equipment_type("CRANE") is EquipmentType.CRANE

    def test_parse_type_passthrough(self):
        assert parse_equipment_type(EquipmentType.DRILL) is EquipmentType.DRILL

    @pytest.mark.parametrize("value", ["TRACTOR", "crane", "", None, 3])
    def test_parse_type_rejects_non_members(self, value):
        with pytest.raises(ValidationError) as exc:
            parse_equipment_type(value)
        assert "DUMP_TRUCK" in exc.value.message

    def test_parse_status_from_string(self):
        assert parse_equipment_status("MAINTENANCE") is S.MAINTENANCE

    @pytest.mark.parametrize("value", ["BROKEN", "available", None])
    def test_parse_status_rejects_non_members(self, value):
        with pytest.raises(ValidationError):
            parse_equipment_status(value)
