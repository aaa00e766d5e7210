"""Tests for the numpy snapshot encoders."""
import numpy as np
import pytest

from scm_sim.config import SCMConfig
from scm_sim.env.session import GameSession
from scm_sim.observation import StateObservation


@pytest.fixture
def played_session(quiet_rng):
    session = GameSession(SCMConfig(), rng=quiet_rng)
    session.place_order(1, 1, 10)
    session.advance_turn()
    session.resize_players(2)
    session.advance_turn()
    return session


def test_encode_shapes(played_session):
    obs = StateObservation().encode(played_session.state)

    assert obs["ledger"].shape == (2, StateObservation.LEDGER_DIM)
    assert obs["inventory"].shape == (2, 2)
    assert obs["scores"].shape == (3,)


def test_ledger_rows_match_players(played_session):
    state = played_session.state
    ledger = StateObservation().encode_ledger(state)

    budget_col = StateObservation.LEDGER_FIELDS.index("budget")
    net_col = StateObservation.LEDGER_FIELDS.index("net_profit")
    assert ledger[0, budget_col] == pytest.approx(state.players[0].budget)
    assert ledger[1, net_col] == pytest.approx(state.players[1].net_profit)


def test_scores_end_with_ai(played_session):
    state = played_session.state
    scores = StateObservation().encode_scores(state)
    assert scores[-1] == pytest.approx(state.ai_score)


def test_demand_series_per_product(played_session):
    series = StateObservation().demand_series(played_session.state)

    assert set(series) == {"Product A", "Product B"}
    # one entry in turn 2, two in turn 3
    assert series["Product A"].dtype == np.int64
    assert len(series["Product A"]) == 3


def test_player_demand_matrix_pads_late_joiners(played_session):
    matrix = StateObservation().player_demand_matrix(played_session.state, 1)

    assert matrix.shape == (2, 2)
    assert np.isnan(matrix[1, 0])
    assert not np.isnan(matrix[1, 1])
    assert not np.isnan(matrix[0]).any()


def test_financial_report(played_session):
    report = StateObservation().financial_report(played_session.state, 1)
    assert report["net_profit"] == pytest.approx(report["revenue"] - report["expenses"])
