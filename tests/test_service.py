import pytest
from conftest import FixedRng, make_mon
from genmon.battle.models import Move
from genmon.battle.service import BattleService
from genmon.battle.session import Attack, BattleState, Flee, Heal, Inventory, Outcome
from genmon.core.errors import InvalidActionError, StaleHandleError
from genmon.system.settings import Settings, SettingsData


@pytest.fixture
def service(tmp_path):
    data = SettingsData(heal_amount=30, enemy_strategy="strongest")
    return BattleService(Settings(data, tmp_path / "settings.json"))


def brawler():
    return make_mon("Brawler", speed=10, moves=[
        Move(name="Tackle", element="normal", power=40),
        Move(name="Karate Chop", element="fighting", power=40),
    ])


def test_settings_drive_rules_and_strategy(service):
    handle = service.start_encounter([make_mon("Ace", current_hp=40)], brawler(), rng=FixedRng(),
                                     inventory=Inventory(potions=1))
    assert handle.opening.state == BattleState.AWAITING_PLAYER_ACTION
    ev = service.submit_action(handle, Heal())
    assert ev.attacks[-1].move == "Karate Chop"
    # 40 + 30 healed, then a super effective hit for 10
    assert service.get(handle).lead.stats.current_hp == 60


def test_submit_by_id_and_close(service):
    handle = service.start_encounter([make_mon("Ace")], make_mon("Wildling", speed=10, current_hp=5),
                                     rng=FixedRng())
    ev = service.submit_action(handle.id, Attack(0))
    assert ev.result.outcome == Outcome.WIN
    with pytest.raises(StaleHandleError):
        service.submit_action(handle, Attack(0))
    result = service.close(handle)
    assert result is ev.result
    with pytest.raises(StaleHandleError):
        service.get(handle)


def test_rejected_action_propagates(service):
    handle = service.start_encounter([make_mon("Ace")], make_mon("Wildling", speed=10), rng=FixedRng())
    with pytest.raises(InvalidActionError):
        service.submit_action(handle, Attack(9))
    assert service.submit_action(handle, Flee()).state == BattleState.TERMINAL_FLED


def test_unknown_handle(service):
    with pytest.raises(StaleHandleError):
        service.get("nope")


def test_close_unfinished_returns_none(service):
    handle = service.start_encounter([make_mon("Ace")], make_mon("Wildling", speed=10), rng=FixedRng())
    assert service.close(handle) is None


def test_finished_encounters_are_retired(tmp_path):
    svc = BattleService(Settings(SettingsData(), tmp_path / "settings.json"), max_results=1)
    first = svc.start_encounter([make_mon("Ace")], make_mon("Wildling", speed=10), rng=FixedRng())
    svc.submit_action(first, Flee())
    # retired without close(): the live table no longer holds it
    with pytest.raises(StaleHandleError):
        svc.get(first)
    second = svc.start_encounter([make_mon("Ace")], make_mon("Wildling", speed=10), rng=FixedRng())
    svc.submit_action(second, Flee())
    # only the newest result is kept
    with pytest.raises(StaleHandleError):
        svc.close(first)
    assert svc.close(second).outcome == Outcome.FLED
    with pytest.raises(StaleHandleError):
        svc.close(second)


def test_opening_knockout_result_available(tmp_path):
    svc = BattleService(Settings(SettingsData(), tmp_path / "settings.json"))
    handle = svc.start_encounter([make_mon("Ace", current_hp=3)], make_mon("Zippy", speed=50), rng=FixedRng())
    assert handle.opening.state == BattleState.TERMINAL_LOSE
    assert svc.close(handle).outcome == Outcome.LOSE
