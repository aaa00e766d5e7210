"""Tests for command parsing and dispatch."""
import pytest

from scm_sim.config import SCMConfig
from scm_sim.core.state import GameState
from scm_sim.env.action import Command, CommandType, execute_command, parse_command
from scm_sim.env.session import GameSession
from scm_sim.utils.errors import InvalidArgumentError, NotFoundError


@pytest.fixture
def session(quiet_rng):
    return GameSession(SCMConfig(), rng=quiet_rng)


def test_parse_by_name_and_value():
    assert parse_command({"type": "advance_turn"}).command_type == CommandType.ADVANCE_TURN
    command = parse_command({"type": 0, "player_id": 1, "product_id": 1, "quantity": 3})
    assert command.command_type == CommandType.PLACE_ORDER
    assert command.params == {"player_id": 1, "product_id": 1, "quantity": 3}


@pytest.mark.parametrize("payload", [
    {},
    {"type": "launch_rocket"},
    {"type": 99},
    {"type": "place_order", "player_id": 1, "product_id": 1},
])
def test_parse_rejects_bad_payloads(payload):
    with pytest.raises(InvalidArgumentError):
        parse_command(payload)


def test_full_turn_through_commands(session):
    payloads = [
        {"type": "resize_players", "target_count": 2},
        {"type": "place_order", "player_id": 1, "product_id": 1, "quantity": 10},
        {"type": "set_supplier", "product_id": 2, "supplier_id": 3},
        {"type": "set_investment", "player_id": 2, "kind": "facility", "amount": 300},
        {"type": "queue_trade", "from_player": 1, "to_player": 2},
        {"type": "set_difficulty", "mode": "easy"},
    ]
    for payload in payloads:
        assert execute_command(session, parse_command(payload)) is None

    result = execute_command(session, parse_command({"type": "advance_turn"}))

    assert isinstance(result, GameState)
    assert result.turn == 2
    assert result.products[1].supplier_id == 3
    assert result.players[1].production_capacity == 103
    assert result.trade_offers == []
    assert session.last_report.trade_results[0].accepted


def test_errors_propagate_from_session(session):
    with pytest.raises(NotFoundError):
        execute_command(session, Command(CommandType.SET_SUPPLIER,
                                         {"product_id": 1, "supplier_id": 77}))


def test_missing_parameter_on_direct_command(session):
    with pytest.raises(InvalidArgumentError):
        execute_command(session, Command(CommandType.SET_DIFFICULTY, {}))
