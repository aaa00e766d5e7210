"""Tests for the GameSession command surface."""
import threading

import pytest

from scm_sim.config import SCMConfig, get_hard_config
from scm_sim.core.state import create_initial_state
from scm_sim.env.session import GameSession
from scm_sim.utils.constants import Difficulty
from scm_sim.utils.errors import InvalidArgumentError, NotFoundError, TurnClosedError
from scm_sim.utils.rng import RandomSource


@pytest.fixture
def session(quiet_rng):
    return GameSession(SCMConfig(), rng=quiet_rng)


def test_initial_session_state(session):
    state = session.state

    assert state.turn == 1
    assert [p.name for p in state.products] == ["Product A", "Product B"]
    assert state.player_ids == [1]
    assert state.products[0].inventory == [50.0]
    assert state.players[0].budget == 1000.0
    assert state.ai_score == 0.0


def test_snapshot_is_isolated(session):
    snapshot = session.state
    snapshot.players[0].budget = -1
    snapshot.products[0].position(1).order = 99

    assert session.state.players[0].budget == 1000.0
    assert session.state.products[0].position(1).order == 0


def test_place_order_overwrites(session):
    session.place_order(1, 1, 10)
    session.place_order(1, 1, 4)

    assert session.state.products[0].position(1).order == 4


def test_place_order_accepts_whole_floats(session):
    session.place_order(1, 2, 7.0)
    assert session.state.products[1].position(1).order == 7


@pytest.mark.parametrize("quantity", [-1, 2.5, "10", True, None])
def test_place_order_rejects_bad_quantities(session, quantity):
    before = session.state.get_state_dict()

    with pytest.raises(InvalidArgumentError):
        session.place_order(1, 1, quantity)

    assert session.state.get_state_dict() == before


def test_place_order_unknown_ids(session):
    with pytest.raises(NotFoundError):
        session.place_order(9, 1, 5)
    with pytest.raises(NotFoundError):
        session.place_order(1, 9, 5)


def test_set_supplier_choice(session):
    session.set_supplier_choice(1, 3)
    assert session.state.products[0].supplier_id == 3

    with pytest.raises(NotFoundError):
        session.set_supplier_choice(1, 42)
    with pytest.raises(NotFoundError):
        session.set_supplier_choice(42, 1)


def test_set_investment(session):
    session.set_investment(1, "rd", 50)
    session.set_investment(1, "facility", 200)
    session.set_investment(1, "rd", 75)

    player = session.state.players[0]
    assert player.rd_investment == 75.0
    assert player.facility_investment == 200.0


def test_set_investment_validation(session):
    with pytest.raises(InvalidArgumentError):
        session.set_investment(1, "marketing", 50)
    with pytest.raises(InvalidArgumentError):
        session.set_investment(1, "rd", -5)
    with pytest.raises(InvalidArgumentError):
        session.set_investment(1, "rd", float("nan"))
    with pytest.raises(InvalidArgumentError):
        session.set_investment(1, "facility", float("inf"))
    with pytest.raises(NotFoundError):
        session.set_investment(7, "rd", 5)


@pytest.mark.parametrize("kind", ["rd", "facility"])
def test_infinite_investment_keeps_game_advanceable(session, make_rng, kind):
    expected = GameSession(SCMConfig(), rng=make_rng()).advance_turn()

    with pytest.raises(InvalidArgumentError):
        session.set_investment(1, kind, float("inf"))
    state = session.advance_turn()

    assert state.turn == 2
    assert state.players[0].get_state_dict() == expected.players[0].get_state_dict()
    assert session.advance_turn().turn == 3


def test_infinite_trade_amount_rejected(session):
    session.resize_players(2)

    with pytest.raises(InvalidArgumentError):
        session.queue_trade_offer(1, 2, float("inf"))
    assert session.state.trade_offers == []


def test_queue_trade_offer_defaults_amount(session):
    session.resize_players(2)
    session.queue_trade_offer(1, 2)
    session.queue_trade_offer(2, 1, 30)

    offers = session.state.trade_offers
    assert [(o.from_player, o.to_player, o.amount) for o in offers] == [
        (1, 2, 100.0), (2, 1, 30.0),
    ]


def test_queue_trade_offer_validation(session):
    session.resize_players(2)
    with pytest.raises(InvalidArgumentError):
        session.queue_trade_offer(1, 1, 10)
    with pytest.raises(InvalidArgumentError):
        session.queue_trade_offer(1, 2, -10)
    with pytest.raises(NotFoundError):
        session.queue_trade_offer(1, 5, 10)


def test_resize_grow_and_shrink(session):
    session.resize_players(4)
    state = session.state
    assert state.player_ids == [1, 2, 3, 4]
    assert all(p.inventory == [50.0] * 4 for p in state.products)
    assert all(p.orders == [0] * 4 for p in state.products)
    assert state.players[3].budget == 1000.0

    session.queue_trade_offer(1, 4, 10)
    session.resize_players(2)
    state = session.state
    assert state.player_ids == [1, 2]
    assert all(len(p.inventory) == 2 and len(p.orders) == 2 for p in state.products)
    assert state.trade_offers == []
    assert state.is_aligned()


def test_resize_keeps_ids_stable(session):
    session.place_order(1, 1, 5)
    session.resize_players(3)
    session.resize_players(1)
    session.resize_players(2)

    state = session.state
    # removed ids are never reused
    assert state.player_ids == [1, 4]
    assert state.products[0].position(1).order == 5
    assert state.products[0].position(4).inventory == 50.0


@pytest.mark.parametrize("count", [0, -2, 1.5])
def test_resize_rejects_bad_counts(session, count):
    with pytest.raises(InvalidArgumentError):
        session.resize_players(count)


def test_set_difficulty(session):
    session.set_difficulty("hard")
    assert session.difficulty == Difficulty.HARD
    assert session.difficulty_coefficient == 2.0

    with pytest.raises(InvalidArgumentError):
        session.set_difficulty("nightmare")


def test_config_difficulty_is_default():
    assert GameSession(get_hard_config()).difficulty == Difficulty.HARD


def test_advance_consumes_decisions(session):
    session.place_order(1, 1, 10)
    session.set_investment(1, "facility", 100)

    state = session.advance_turn()

    assert state.turn == 2
    assert state.products[0].orders == [0]
    assert state.players[0].production_capacity == 101
    assert session.last_report.turn == 2


def test_decisions_for_closed_turn_rejected(session):
    session.place_order(1, 1, 3, turn=1)
    session.advance_turn()

    with pytest.raises(TurnClosedError):
        session.place_order(1, 1, 3, turn=1)
    with pytest.raises(TurnClosedError):
        session.set_investment(1, "rd", 3, turn=1)
    session.place_order(1, 1, 3, turn=2)


def test_failed_advance_leaves_session_untouched(config):
    state = create_initial_state(config)
    state.products[0].supplier_id = 99
    rng = RandomSource(seed=3)
    session = GameSession(config, rng=rng, state=state)
    expected_draw = RandomSource(seed=3).random()

    with pytest.raises(NotFoundError):
        session.advance_turn()

    assert session.turn == 1
    assert session.last_report is None
    assert rng.random() == expected_draw


def test_concurrent_orders_are_serialized(session):
    session.resize_players(4)

    def submit(player_id):
        for quantity in range(50):
            session.place_order(player_id, 1, quantity)

    threads = [threading.Thread(target=submit, args=(pid,)) for pid in (1, 2, 3, 4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert session.state.products[0].orders == [49, 49, 49, 49]


def test_turn_waits_for_running_command(session):
    seen = []
    reader = threading.Thread(target=lambda: seen.append(session.turn))

    with session._lock:
        reader.start()
        reader.join(timeout=0.2)
        assert reader.is_alive()
    reader.join()

    assert seen == [1]
