import pytest
from genmon.battle.ledger import ContributionLedger, ContributionRecord


def test_records_start_at_zero():
    ledger = ContributionLedger([0, 2])
    rec = ledger.get(2)
    assert (rec.damage_dealt, rec.damage_taken, rec.turns_active) == (0, 0, 0)
    assert ledger.snapshot() == []


def test_accumulates_per_index():
    ledger = ContributionLedger([0, 1])
    ledger.record_attack(0, 12)
    ledger.record_attack(0, 3)
    ledger.record_defense(1, 7)
    ledger.record_turn(1)
    ledger.record_turn(1)
    assert ledger.get(0).damage_dealt == 15
    assert ledger.get(1).damage_taken == 7
    assert ledger.get(1).turns_active == 2


def test_snapshot_is_ordered_copy_of_active_records():
    ledger = ContributionLedger([3, 1, 0])
    ledger.record_attack(3, 4)
    ledger.record_turn(1)
    snap = ledger.snapshot()
    assert [r.roster_index for r in snap] == [1, 3]
    snap[0].turns_active = 99
    assert ledger.get(1).turns_active == 1


def test_negative_amounts_rejected():
    ledger = ContributionLedger([0])
    with pytest.raises(ValueError):
        ledger.record_attack(0, -1)
    with pytest.raises(ValueError):
        ledger.record_defense(0, -5)
    assert ledger.get(0) == ContributionRecord(0)


def test_unknown_index_gets_a_record():
    ledger = ContributionLedger()
    ledger.record_attack(4, 10)
    assert ledger.snapshot() == [ContributionRecord(4, damage_dealt=10)]
