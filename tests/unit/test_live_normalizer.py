"""
Unit tests for live game snapshot normalization.
"""

import pytest
from rift_relay.live.normalizer import (
    aggregate_team,
    extract_events,
    normalize_game_data,
    normalize_item,
    normalize_player,
    resolve_display_name,
)
from rift_relay.live.models import PlayerStat


class TestResolveDisplayName:
    """Tests for the display name fallback chain"""

    def test_prefers_riot_id_name(self):
        assert resolve_display_name({"riotIdGameName": "Faker", "summonerName": "Hide on bush"}) == "Faker"

    def test_falls_back_to_summoner_name(self):
        assert resolve_display_name({"riotIdGameName": "", "summonerName": "Hide on bush"}) == "Hide on bush"

    def test_unknown_when_both_missing(self):
        assert resolve_display_name({}) == "Unknown"


class TestNormalizePlayer:
    """Tests for per-player normalization"""

    def test_player_without_items_has_zero_gold(self):
        """Test a player with no items field yields gold 0 and no items"""
        player = normalize_player({"championName": "Lux", "team": "CHAOS"})

        assert player.approximate_gold == 0
        assert player.items == []

    def test_gold_is_price_times_count(self):
        """Test approximated gold sums unit price x count"""
        player = normalize_player({
            "items": [
                {"itemID": 1, "price": 300, "count": 1},
                {"itemID": 2, "price": 50, "count": 3},
            ]
        })

        assert player.approximate_gold == 450

    def test_missing_count_counts_once(self):
        item = normalize_item({"itemID": 1055, "price": 450})
        assert item.count == 1
        assert item.total_price == 450

    def test_scores_default_to_zero(self):
        player = normalize_player({"summonerName": "Nobody"})

        assert (player.kills, player.deaths, player.assists, player.creep_score) == (0, 0, 0, 0)
        assert player.summoner_name == "Nobody"

    def test_non_dict_input_does_not_raise(self):
        player = normalize_player(None)
        assert player.summoner_name == "Unknown"

    def test_mistyped_fields_use_defaults(self):
        player = normalize_player({"level": "ten", "scores": ["bad"], "items": "none"})

        assert player.level == 0
        assert player.kills == 0
        assert player.items == []


class TestAggregateTeam:
    """Tests for team totals"""

    def test_sums_all_fields(self):
        players = [
            PlayerStat(summoner_name="a", kills=2, deaths=1, assists=3, creep_score=100, approximate_gold=1000),
            PlayerStat(summoner_name="b", kills=1, deaths=4, assists=0, creep_score=20, approximate_gold=500),
        ]

        team = aggregate_team(players)

        assert team.total_kills == 3
        assert team.total_deaths == 5
        assert team.total_assists == 3
        assert team.total_cs == 120
        assert team.total_gold == 1500
        assert [p.summoner_name for p in team.players] == ["a", "b"]

    def test_order_independent(self):
        players = [
            PlayerStat(summoner_name="a", kills=2, approximate_gold=10),
            PlayerStat(summoner_name="b", kills=5, approximate_gold=30),
        ]

        forward = aggregate_team(players)
        backward = aggregate_team(list(reversed(players)))

        assert forward.total_kills == backward.total_kills
        assert forward.total_gold == backward.total_gold

    def test_empty_team(self):
        team = aggregate_team([])
        assert team.total_gold == 0
        assert team.players == []


class TestNormalizeGameData:
    """Tests for full snapshot normalization"""

    def test_splits_teams_by_tag(self, sample_game_data):
        state = normalize_game_data(sample_game_data)

        assert [p.summoner_name for p in state.blue_team.players] == ["BlueTop", "BlueMid"]
        assert [p.summoner_name for p in state.red_team.players] == ["RedTop", "Unknown"]

    def test_team_totals(self, sample_game_data):
        state = normalize_game_data(sample_game_data)

        assert state.blue_team.total_kills == 6
        assert state.blue_team.total_gold == 6000
        assert state.red_team.total_kills == 1
        assert state.red_team.total_gold == 3333

    def test_game_metadata(self, sample_game_data):
        state = normalize_game_data(sample_game_data)

        assert state.game_time == 520.0
        assert state.game_mode == "CLASSIC"
        assert state.map_name == "Map11"
        assert state.map_number == 11
        assert state.active_player_name == "BlueMid"

    def test_gold_history_left_empty(self, sample_game_data):
        assert normalize_game_data(sample_game_data).gold_history == []

    def test_objective_timers_from_event_log(self, sample_game_data):
        state = normalize_game_data(sample_game_data)
        dragon = state.objective_timers["dragon"]

        assert dragon.alive is False
        assert dragon.respawn_at == 700.0
        assert dragon.time_remaining == pytest.approx(180.0)
        assert dragon.dragon_type == "Fire"
        assert state.objective_timers["baron"].alive is True

    def test_empty_snapshot_uses_defaults(self):
        state = normalize_game_data({})

        assert state.game_time == 0.0
        assert state.game_mode == "CLASSIC"
        assert state.map_name == "Map11"
        assert state.map_number == 11
        assert state.blue_team.players == []
        assert all(t.alive for t in state.objective_timers.values())

    def test_negative_game_time_clamped(self):
        state = normalize_game_data({"gameData": {"gameTime": -3.2}})
        assert state.game_time == 0.0

    def test_to_dict_is_json_ready(self, sample_game_data):
        import json

        data = normalize_game_data(sample_game_data).to_dict()
        json.dumps(data)

        assert data["blue_team"]["total_gold"] == 6000
        assert data["objective_timers"]["dragon"]["dragon_type"] == "Fire"
        assert "dragon_type" not in data["objective_timers"]["baron"]


class TestExtractEvents:
    """Tests for event log extraction"""

    def test_returns_event_list(self, sample_game_data):
        assert len(extract_events(sample_game_data)) == 4

    @pytest.mark.parametrize("data", [None, {}, {"events": None}, {"events": {"Events": "x"}}])
    def test_missing_log_is_empty(self, data):
        assert extract_events(data) == []
