from datetime import date

import pytest

from fantasy_points_tracker.domain.batting_stats import BattingStats
from fantasy_points_tracker.domain.pitching_stats import PitchingStats
from fantasy_points_tracker.domain.player_stats import PlayerStats
from fantasy_points_tracker.domain.player_weekly import PlayerWeekly, latest_nonzero_points
from fantasy_points_tracker.exceptions import StatsValidationError


class TestBattingStats:
    def test_hits_cannot_exceed_at_bats(self) -> None:
        with pytest.raises(StatsValidationError, match="Hits"):
            BattingStats(at_bats=2, hits=3)

    def test_negative_rejected(self) -> None:
        with pytest.raises(StatsValidationError):
            BattingStats(walks=-1)

    def test_validation_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            BattingStats(runs=-1)

    def test_to_dict_uses_camel_case(self) -> None:
        data = BattingStats(at_bats=4, hits=2, stolen_bases=1).to_dict()
        assert data["atBats"] == 4
        assert data["stolenBases"] == 1


class TestPitchingStats:
    def test_holds_default_none(self) -> None:
        assert PitchingStats.zero().holds is None

    def test_negative_holds_rejected(self) -> None:
        with pytest.raises(StatsValidationError):
            PitchingStats(holds=-1)

    def test_negative_innings_rejected(self) -> None:
        with pytest.raises(StatsValidationError):
            PitchingStats(innings_pitched=-0.1)

    def test_to_dict_keeps_null_holds(self) -> None:
        assert PitchingStats().to_dict()["holds"] is None
        assert PitchingStats(holds=0).to_dict()["holds"] == 0


class TestPlayerStats:
    def _make(self, **overrides: object) -> PlayerStats:
        fields: dict[str, object] = {
            "id": 1,
            "name": "Aaron Judge",
            "team": "NYY",
            "opponent_team": "BOS",
            "position": "RF",
            "points": 7.0,
            "game_date": date(2024, 6, 14),
        }
        fields.update(overrides)
        return PlayerStats(**fields)  # type: ignore[arg-type]

    @pytest.mark.parametrize("field", ["name", "team", "position"])
    def test_required_fields(self, field: str) -> None:
        with pytest.raises(StatsValidationError, match=field):
            self._make(**{field: ""})

    def test_sub_stats_zero_filled(self) -> None:
        stats = self._make()
        assert stats.batting_stats == BattingStats.zero()
        assert stats.pitching_stats == PitchingStats.zero()

    def test_to_dict_omits_unknown_home_flag(self) -> None:
        assert "isHomeTeam" not in self._make().to_dict()
        assert self._make(is_home_team=True).to_dict()["isHomeTeam"] is True

    def test_to_dict_shape(self) -> None:
        data = self._make().to_dict()
        assert data["gameDate"] == "2024-06-14"
        assert data["opponentTeam"] == "BOS"
        assert data["isPositionPlayerPitching"] is False
        assert set(data["battingStats"]) >= {"atBats", "hits", "walks"}


class TestPlayerWeekly:
    def test_to_dict(self) -> None:
        weekly = PlayerWeekly(
            id=5,
            full_name="Shohei Ohtani",
            team_name="Los Angeles Dodgers",
            position_abbr="DH",
            weekly_points=(10.0, 0.0, 4.0),
            total_points=14.0,
        )
        data = weekly.to_dict()
        assert data["weeklyPoints"] == [10.0, 0.0, 4.0]
        assert data["isRostered"] is False

    def test_latest_nonzero_walks_back(self) -> None:
        assert latest_nonzero_points((3.0, 5.0, 0.0, 2.0), 2) == 5.0

    def test_latest_nonzero_all_zero(self) -> None:
        assert latest_nonzero_points((0.0, 0.0), 1) == 0.0

    def test_latest_nonzero_no_complete_week(self) -> None:
        assert latest_nonzero_points((4.0,), -1) == 0.0
