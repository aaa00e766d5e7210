"""
Session interface for the SCM simulator.

This package contains what collaborators talk to:
- GameSession: Decision commands, turn advance and snapshots
- Command / CommandType: Transport-friendly command dispatch
"""

from scm_sim.env.session import GameSession
from scm_sim.env.action import Command, CommandType, execute_command, parse_command

__all__ = [
    "GameSession",
    "Command",
    "CommandType",
    "execute_command",
    "parse_command",
]
