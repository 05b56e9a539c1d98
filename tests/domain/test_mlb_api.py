import pytest

from fantasy_points_tracker.domain.mlb_api import Boxscore, BoxscorePlayer, Game, RawPitching, Split
from fantasy_points_tracker.exceptions import UpstreamMalformedError
from tests.helpers import boxscore_data, player_block, split_row


class TestRawPitching:
    def test_missing_holds_stays_none(self) -> None:
        assert RawPitching.from_api({"gamesPlayed": 1}).holds is None

    def test_zero_holds_kept(self) -> None:
        assert RawPitching.from_api({"holds": 0}).holds == 0

    @pytest.mark.parametrize("value", ["-", "", "n/a"])
    def test_malformed_holds_treated_as_absent(self, value: str) -> None:
        assert RawPitching.from_api({"holds": value}).holds is None

    def test_numeric_string_holds_parsed(self) -> None:
        assert RawPitching.from_api({"holds": "3"}).holds == 3

    def test_maps_upstream_names(self) -> None:
        raw = RawPitching.from_api({"inningsPitched": "6.2", "hits": 4, "baseOnBalls": 1, "strikeOuts": 7})
        assert raw.innings_pitched == "6.2"
        assert raw.hits_allowed == 4
        assert raw.walks_issued == 1
        assert raw.strikeouts == 7

    def test_missing_innings_default(self) -> None:
        assert RawPitching.from_api({}).innings_pitched == "0.0"


class TestBoxscorePlayer:
    def test_parses_batting_block(self) -> None:
        player = BoxscorePlayer.from_api(player_block(1, "A B", "C", batting={"atBats": 4, "baseOnBalls": 2}))
        assert player.batting is not None
        assert player.batting.walks == 2
        assert player.pitching is None

    def test_missing_position_is_unknown(self) -> None:
        player = BoxscorePlayer.from_api({"person": {"id": 2, "fullName": "X"}})
        assert player.position_abbreviation == "Unknown"

    def test_empty_stat_blocks_are_absent(self) -> None:
        player = BoxscorePlayer.from_api({"person": {"id": 2}, "stats": {"batting": {}, "pitching": {}}})
        assert player.batting is None
        assert player.pitching is None


class TestBoxscore:
    def test_parses_both_sides(self) -> None:
        data = boxscore_data([player_block(1, "Away Guy")], [player_block(2, "Home Guy")])
        boxscore = Boxscore.from_api(745000, data)
        assert boxscore.away.label == "NYY"
        assert boxscore.home.label == "BOS"
        assert [p.person_id for p in boxscore.away.players] == [1]

    def test_label_falls_back_to_name(self) -> None:
        data = boxscore_data(away_abbr="")
        assert Boxscore.from_api(1, data).away.label == "New York Yankees"

    def test_missing_teams_block(self) -> None:
        with pytest.raises(UpstreamMalformedError):
            Boxscore.from_api(1, {})

    def test_missing_home_side(self) -> None:
        data = boxscore_data()
        del data["teams"]["home"]
        with pytest.raises(UpstreamMalformedError, match="home"):
            Boxscore.from_api(1, data)

    def test_side_without_team(self) -> None:
        data = boxscore_data()
        data["teams"]["away"]["team"] = {}
        with pytest.raises(UpstreamMalformedError, match="away"):
            Boxscore.from_api(1, data)


class TestGame:
    def test_from_api(self) -> None:
        game = Game.from_api(
            {
                "gamePk": 745000,
                "gameType": "R",
                "season": "2024",
                "gameDate": "2024-06-14T23:05:00Z",
                "status": {"detailedState": "Final"},
                "teams": {"away": {"team": {"name": "New York Yankees"}}, "home": {"team": {"name": "Boston Red Sox"}}},
                "venue": {"name": "Fenway Park"},
            }
        )
        assert game.game_id == 745000
        assert game.status == "Final"
        assert game.home_team == "Boston Red Sox"
        assert game.venue == "Fenway Park"


class TestSplit:
    def test_from_api(self) -> None:
        split = Split.from_api(split_row(7, "Juan Soto", position="RF", hits=2))
        assert split is not None
        assert split.player_id == 7
        assert split.position_abbreviation == "RF"
        assert split.games_played == 1

    def test_missing_player_or_stat(self) -> None:
        assert Split.from_api({"stat": {"gamesPlayed": 1}}) is None
        assert Split.from_api({"player": {"id": 1}}) is None
