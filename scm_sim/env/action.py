"""
Command definition and dispatch for the SCM session.

A transport layer (HTTP handler, websocket, message queue) turns incoming
payloads into Commands and hands them to ``execute_command``:

    execute_command(session, parse_command({
        "type": "place_order", "player_id": 1, "product_id": 1, "quantity": 10,
    }))
"""
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict

from scm_sim.env.session import GameSession
from scm_sim.utils.errors import InvalidArgumentError


class CommandType(IntEnum):
    """Commands accepted by a GameSession."""
    PLACE_ORDER = 0
    SET_SUPPLIER = 1
    SET_INVESTMENT = 2
    QUEUE_TRADE = 3
    RESIZE_PLAYERS = 4
    SET_DIFFICULTY = 5
    ADVANCE_TURN = 6


# Required parameters per command type
COMMAND_PARAMS: Dict[CommandType, tuple] = {
    CommandType.PLACE_ORDER: ("player_id", "product_id", "quantity"),
    CommandType.SET_SUPPLIER: ("product_id", "supplier_id"),
    CommandType.SET_INVESTMENT: ("player_id", "kind", "amount"),
    CommandType.QUEUE_TRADE: ("from_player", "to_player"),
    CommandType.RESIZE_PLAYERS: ("target_count",),
    CommandType.SET_DIFFICULTY: ("mode",),
    CommandType.ADVANCE_TURN: (),
}


@dataclass
class Command:
    """A command and its parameters."""
    command_type: CommandType
    params: Dict[str, Any] = field(default_factory=dict)

    def require(self, name: str) -> Any:
        try:
            return self.params[name]
        except KeyError:
            raise InvalidArgumentError(
                f"{self.command_type.name} requires parameter '{name}'"
            ) from None


def parse_command(payload: Dict[str, Any]) -> Command:
    """
    Build a Command from a plain dict.

    ``type`` may be the enum name in any case ("place_order") or its
    integer value.
    """
    if "type" not in payload:
        raise InvalidArgumentError("Command payload needs a 'type'")

    raw_type = payload["type"]
    try:
        if isinstance(raw_type, str):
            command_type = CommandType[raw_type.upper()]
        else:
            command_type = CommandType(raw_type)
    except (KeyError, ValueError):
        raise InvalidArgumentError(f"Unknown command type: {raw_type!r}") from None

    params = {k: v for k, v in payload.items() if k != "type"}
    command = Command(command_type, params)
    for name in COMMAND_PARAMS[command_type]:
        command.require(name)
    return command


def execute_command(session: GameSession, command: Command) -> Any:
    """
    Execute a command on the session.

    Returns:
        The new state snapshot for ADVANCE_TURN, None otherwise

    Raises:
        InvalidArgumentError / NotFoundError / TurnClosedError from the session
    """
    command_type = CommandType(command.command_type)
    params = command.params
    turn = params.get("turn")

    if command_type == CommandType.PLACE_ORDER:
        session.place_order(
            command.require("player_id"),
            command.require("product_id"),
            command.require("quantity"),
            turn=turn,
        )

    elif command_type == CommandType.SET_SUPPLIER:
        session.set_supplier_choice(
            command.require("product_id"), command.require("supplier_id"), turn=turn
        )

    elif command_type == CommandType.SET_INVESTMENT:
        session.set_investment(
            command.require("player_id"),
            command.require("kind"),
            command.require("amount"),
            turn=turn,
        )

    elif command_type == CommandType.QUEUE_TRADE:
        session.queue_trade_offer(
            command.require("from_player"),
            command.require("to_player"),
            params.get("amount"),
            turn=turn,
        )

    elif command_type == CommandType.RESIZE_PLAYERS:
        session.resize_players(command.require("target_count"))

    elif command_type == CommandType.SET_DIFFICULTY:
        session.set_difficulty(command.require("mode"))

    elif command_type == CommandType.ADVANCE_TURN:
        return session.advance_turn()

    else:
        raise ValueError(f"Unknown command type: {command_type}")

    return None
