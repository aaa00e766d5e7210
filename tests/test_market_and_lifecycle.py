"""Tests for seasons, global markets, lifecycle, events and forecasting."""
import pytest

from scm_data import SCMDataLoader
from scm_data.data_models import EventSpec
from scm_sim.engine.events import EnvironmentalEventGenerator
from scm_sim.engine.forecast import DemandForecaster
from scm_sim.engine.lifecycle import LifecycleStateMachine
from scm_sim.engine.market import GlobalMarketModel, SeasonCycle, round_half_up
from scm_sim.utils.constants import LifecycleStage, Season


# ===== SeasonCycle =====

@pytest.mark.parametrize("turn, season", [
    (1, Season.SUMMER),
    (2, Season.AUTUMN),
    (3, Season.WINTER),
    (4, Season.SPRING),
    (9, Season.SUMMER),
])
def test_season_for_turn(turn, season):
    assert SeasonCycle.season_for_turn(turn) == season


def test_season_factor_follows_current_season(initial_state):
    initial_state.current_season = SeasonCycle.season_for_turn(1)
    assert initial_state.seasonal_factor == 1.2

    initial_state.current_season = SeasonCycle.season_for_turn(3)
    assert initial_state.seasonal_factor == 0.7


# ===== GlobalMarketModel =====

def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(18.9) == 19
    assert round_half_up(2.49) == 2


def test_demand_per_country():
    market = GlobalMarketModel(SCMDataLoader().get_all_countries())

    assert market.demand_for_seat(20, 0) == 20      # USA 1 x 1
    assert market.demand_for_seat(20, 1) == 2640    # Japan 110 x 1.2
    assert market.demand_for_seat(20, 2) == 20      # EU 0.9 x 1.1 = 19.8
    assert market.demand_for_seat(20, 3) == 34      # China 1.3 x 1.3 = 33.8


def test_countries_cycle_across_seats():
    market = GlobalMarketModel(SCMDataLoader().get_all_countries())

    assert market.country_for_seat(4).name == "USA"
    assert market.country_for_seat(5).name == "Japan"


def test_zero_baseline_gives_zero_demand():
    market = GlobalMarketModel(SCMDataLoader().get_all_countries())
    assert market.demand_for_seat(0, 1) == 0


# ===== LifecycleStateMachine =====

@pytest.mark.parametrize("stage, factor", [
    (LifecycleStage.INTRODUCTION, 0.05),
    (LifecycleStage.GROWTH, 0.10),
    (LifecycleStage.MATURITY, 0.0),
    (LifecycleStage.DECLINE, -0.20),
])
def test_lifecycle_demand_factor(stage, factor):
    assert LifecycleStateMachine.demand_factor(stage) == pytest.approx(factor)


def test_lifecycle_advances_on_low_draw(make_rng):
    machine = LifecycleStateMachine(0.1)

    assert machine.roll(LifecycleStage.INTRODUCTION, make_rng([0.05])) == LifecycleStage.GROWTH
    assert machine.roll(LifecycleStage.INTRODUCTION, make_rng([0.5])) == LifecycleStage.INTRODUCTION


def test_decline_is_terminal(make_rng):
    machine = LifecycleStateMachine(1.0)
    rng = make_rng([0.0])

    assert machine.roll(LifecycleStage.DECLINE, rng) == LifecycleStage.DECLINE
    assert rng.random_calls == 1


# ===== EnvironmentalEventGenerator =====

def test_event_fires_below_probability(make_rng):
    events = SCMDataLoader().get_all_events()
    generator = EnvironmentalEventGenerator(events, 0.1)

    event = generator.roll(make_rng([0.05], choice_index=3))
    assert event == events[3]
    assert generator.demand_factor(event) == pytest.approx(1.3)


def test_no_event_above_probability(make_rng):
    generator = EnvironmentalEventGenerator(SCMDataLoader().get_all_events(), 0.1)

    event = generator.roll(make_rng([0.1]))
    assert event is None
    assert generator.demand_factor(event) == 1.0


def test_negative_event_factor():
    assert EventSpec("Natural disaster", -0.3).demand_factor == pytest.approx(0.7)


# ===== DemandForecaster =====

def test_forecast_empty_history_is_zero():
    forecaster = DemandForecaster()
    assert forecaster.forecast([], 1.2, LifecycleStage.GROWTH) == 0.0


def test_forecast_uses_mean_season_and_lifecycle():
    forecaster = DemandForecaster()

    # mean 15, summer 1.2, growth +0.10
    assert forecaster.forecast([10, 20], 1.2, LifecycleStage.GROWTH) == pytest.approx(19.8)
    # decline -0.20
    assert forecaster.forecast([10], 1.0, LifecycleStage.DECLINE) == pytest.approx(8.0)
