"""
Season cycle and global market conversion.
"""
import math
from typing import List

from scm_data.data_models import CountryMarket
from scm_sim.utils.constants import SEASON_ORDER, Season


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


class SeasonCycle:
    """
    Maps a turn number to its season.

    season(turn) = SEASON_ORDER[turn % 4]. The demand multiplier for a
    season lives on the game state (``GameState.seasonal_factor``).
    """

    @staticmethod
    def season_for_turn(turn: int) -> Season:
        return SEASON_ORDER[turn % len(SEASON_ORDER)]


class GlobalMarketModel:
    """
    Converts a home-market baseline into a country's demand figure.

    Countries cycle across player seats: seat i sells into
    ``countries[i % len(countries)]``.
    """

    def __init__(self, countries: List[CountryMarket]):
        """
        Args:
            countries: Ordered country table; the first entry is the home market
        """
        if not countries:
            raise ValueError("GlobalMarketModel needs at least one country")
        self.countries = list(countries)

    def country_for_seat(self, seat: int) -> CountryMarket:
        return self.countries[seat % len(self.countries)]

    def demand_for_country(self, baseline: float, country: CountryMarket) -> int:
        """round(baseline * exchange rate * transport cost)"""
        return round_half_up(baseline * country.exchange_rate * country.transport_cost)

    def demand_for_seat(self, baseline: float, seat: int) -> int:
        return self.demand_for_country(baseline, self.country_for_seat(seat))
