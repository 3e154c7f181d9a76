import pytest

from tracker.data_models.player import BattleType, PageRequest
from tracker.services.player_stats import PlayerStatsService
from tracker.utils.exceptions import InvalidPublicIdError
from tests.helpers import (
    OPPONENT_PUBLIC_ID, PLAYER_ID, PUBLIC_ID, FakeBattleStore, FakePlayerStore,
    make_battle, make_profile, make_record, run
)


def _service(player_store=None, battle_store=None, **kwargs):
    return PlayerStatsService(
        player_store or FakePlayerStore(),
        battle_store or FakeBattleStore(),
        **kwargs
    )


class TestGetPlayerStats:

    @pytest.mark.parametrize("bad_id", ["", "   ", "ABCDEFGHIJKLM", "ABC-123", None])
    def test_invalid_id_never_queries(self, bad_id):
        players, battles = FakePlayerStore(), FakeBattleStore()

        with pytest.raises(InvalidPublicIdError):
            run(_service(players, battles).get_player_stats(bad_id))

        assert players.calls == []
        assert battles.calls == []

    def test_lookup_uses_trimmed_id(self):
        players = FakePlayerStore()

        run(_service(players).get_player_stats("  ABC123456789 "))

        assert players.calls == [("find_by_public_id", PUBLIC_ID)]

    def test_absent_player_skips_battle_store(self):
        players, battles = FakePlayerStore(), FakeBattleStore()

        assert run(_service(players, battles).get_player_stats(PUBLIC_ID)) is None
        assert battles.calls == []

    def test_full_stats(self):
        profile = make_profile([make_record(32, 20001, wins=50, losses=30, rank=15)])
        battle = make_battle()
        players = FakePlayerStore(profiles=[profile])
        battles = FakeBattleStore({PLAYER_ID: [battle]})

        stats = run(_service(players, battles).get_player_stats(PUBLIC_ID))

        assert battles.calls == [("find_all_by_player_id", PLAYER_ID)]
        assert stats.player_id == PLAYER_ID
        assert stats.public_id == PUBLIC_ID
        assert stats.name == "TestPlayer"
        assert stats.region_id == 1
        assert stats.power == 100000
        assert stats.main_character_id == 32

        jin = stats.played_characters[32]
        assert jin.wins == 50
        assert jin.losses == 30
        assert jin.winrate == 62.5
        assert jin.current_season_rank == 15
        assert jin.previous_season_rank is None
        assert jin.matchups[28].wins == 1
        assert jin.best_matchup == 28

        assert len(stats.battles) == 1
        assert stats.battles[0].battle_id == "battle123"
        assert stats.battles[0].player2_public_id == OPPONENT_PUBLIC_ID

    def test_absent_battles_become_empty_history(self):
        profile = make_profile([make_record(32, 20001, wins=1, losses=0, rank=1)])
        battles = FakeBattleStore({PLAYER_ID: None})

        stats = run(_service(FakePlayerStore(profiles=[profile]), battles).get_player_stats(PUBLIC_ID))

        assert stats.battles == []
        assert stats.played_characters[32].matchups == {}
        assert stats.played_characters[32].best_matchup is None

    def test_multiple_characters_and_seasons(self):
        profile = make_profile([
            make_record(32, 19005, wins=30, losses=20, rank=16),
            make_record(32, 20001, wins=50, losses=30, rank=19),
            make_record(28, 20002, wins=10, losses=2, rank=8),
        ])

        stats = run(_service(FakePlayerStore(profiles=[profile])).get_player_stats(PUBLIC_ID))

        assert set(stats.played_characters) == {32, 28}
        assert stats.played_characters[32].winrate == pytest.approx(61.54)
        assert stats.played_characters[32].previous_season_rank == 16
        assert stats.played_characters[28].current_season_rank == 8
        assert stats.main_character_id == 32

    def test_main_character_tie_goes_to_latest_activity(self):
        profile = make_profile([
            make_record(32, 20001, wins=5, losses=5, last_active=100),
            make_record(28, 20001, wins=4, losses=6, last_active=900),
        ])

        stats = run(_service(FakePlayerStore(profiles=[profile])).get_player_stats(PUBLIC_ID))
        assert stats.main_character_id == 28

    def test_no_characters_has_no_main(self):
        stats = run(_service(FakePlayerStore(profiles=[make_profile()])).get_player_stats(PUBLIC_ID))

        assert stats.played_characters == {}
        assert stats.main_character_id is None

    def test_subject_on_side_two_and_unranked_battles(self):
        profile = make_profile([make_record(32, 20001, wins=1, losses=1, rank=3)])
        history = [
            make_battle("b1", player1_public_id=OPPONENT_PUBLIC_ID, player1_character_id=28,
                        player2_public_id=PUBLIC_ID, player2_character_id=32, winner=1),
            make_battle("b2", battle_type=BattleType.QUICK, winner=1),
        ]
        battles = FakeBattleStore({PLAYER_ID: history})

        stats = run(_service(FakePlayerStore(profiles=[profile]), battles).get_player_stats(PUBLIC_ID))

        jin = stats.played_characters[32]
        assert jin.matchups[28].wins == 0
        assert jin.matchups[28].losses == 1
        assert jin.worst_matchup == 28
        assert [b.battle_id for b in stats.battles] == ["b1", "b2"]

    def test_matchups_without_stat_record_are_dropped(self):
        profile = make_profile([make_record(32, 20001, wins=1, losses=0)])
        battles = FakeBattleStore({PLAYER_ID: [make_battle(player1_character_id=5)]})

        stats = run(_service(FakePlayerStore(profiles=[profile]), battles).get_player_stats(PUBLIC_ID))

        assert set(stats.played_characters) == {32}
        assert stats.played_characters[32].matchups == {}
        assert len(stats.battles) == 1

    def test_missing_region_is_sentinel(self):
        profile = make_profile(region_id=None)

        stats = run(_service(FakePlayerStore(profiles=[profile])).get_player_stats(PUBLIC_ID))
        assert stats.region_id == -1


class TestGetPlayerMetadata:

    def test_metadata_reads_profile_only(self):
        players, battles = FakePlayerStore(profiles=[make_profile(region_id=None)]), FakeBattleStore()

        metadata = run(_service(players, battles).get_player_metadata(PUBLIC_ID))

        assert metadata.name == "TestPlayer"
        assert metadata.public_id == PUBLIC_ID
        assert metadata.region_id == -1
        assert metadata.power == 100000
        assert battles.calls == []

    def test_absent_player(self):
        assert run(_service().get_player_metadata(PUBLIC_ID)) is None

    def test_invalid_id(self):
        players = FakePlayerStore()
        with pytest.raises(InvalidPublicIdError):
            run(_service(players).get_player_metadata("bad id!"))
        assert players.calls == []


class TestGetPlayerId:

    def test_id_is_padded(self):
        players = FakePlayerStore(player_ids={PUBLIC_ID: "123456"})

        assert run(_service(players).get_player_id(PUBLIC_ID)) == "000000000000123456"

    def test_full_width_id_unchanged(self):
        players = FakePlayerStore(player_ids={PUBLIC_ID: "123456789012345678"})

        assert run(_service(players).get_player_id(" ABC123456789 ")) == "123456789012345678"
        assert players.calls == [("find_player_id_by_public_id", PUBLIC_ID)]

    def test_absent_player(self):
        assert run(_service().get_player_id(PUBLIC_ID)) is None

    def test_invalid_id(self):
        with pytest.raises(InvalidPublicIdError):
            run(_service().get_player_id("ABCDEFGHIJKLMNOP"))


class TestSearchPlayers:

    def test_search_requests_first_page(self):
        players = FakePlayerStore(search_results=[make_profile()])

        results = run(_service(players).search_players("Test"))

        assert players.calls == [("search_by_name_or_public_id", "Test", PageRequest(page=0, size=20))]
        assert len(results) == 1
        assert results[0].name == "TestPlayer"
        assert results[0].public_id == PUBLIC_ID
        assert results[0].power == 100000

    def test_configured_page_size(self):
        players = FakePlayerStore(search_results=[])

        run(_service(players, search_page_size=5).search_players("Test"))

        assert players.calls[0][2] == PageRequest(page=0, size=5)

    def test_store_results_are_passed_through(self):
        profiles = [make_profile(public_id=f"P{i:03d}", name=f"Player{i}") for i in range(25)]
        players = FakePlayerStore(search_results=profiles)

        results = run(_service(players).search_players("Player"))

        assert len(results) == 25
        assert [r.public_id for r in results] == [p.public_id for p in profiles]

    def test_explicit_zero_page_size_is_kept(self):
        players = FakePlayerStore(search_results=[])
        service = _service(players, search_page_size=0, active_window_minutes=0)

        run(service.search_players("Test"))
        run(service.get_recently_active_players())

        assert service.search_page_size == 0
        assert players.calls == [
            ("search_by_name_or_public_id", "Test", PageRequest(page=0, size=0)),
            ("find_active_within", 0),
        ]

    @pytest.mark.parametrize("store_result", [None, []])
    def test_no_results(self, store_result):
        players = FakePlayerStore(search_results=store_result)
        assert run(_service(players).search_players("nobody")) == []

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query_skips_store(self, query):
        players = FakePlayerStore(search_results=[make_profile()])

        assert run(_service(players).search_players(query)) == []
        assert players.calls == []

    def test_missing_region_is_sentinel(self):
        players = FakePlayerStore(search_results=[make_profile(region_id=None)])

        assert run(_service(players).search_players("Test"))[0].region_id == -1


class TestRecentlyActivePlayers:

    def test_uses_configured_window(self):
        players = FakePlayerStore(active_players=[make_profile(last_active=1700000000)])

        results = run(_service(players, active_window_minutes=10).get_recently_active_players())

        assert players.calls == [("find_active_within", 10)]
        assert len(results) == 1
        assert results[0].name == "TestPlayer"
        assert results[0].last_active == 1700000000

    def test_default_window_from_config(self):
        players = FakePlayerStore(active_players=[])

        run(_service(players).get_recently_active_players())

        assert players.calls == [("find_active_within", 10)]

    @pytest.mark.parametrize("store_result", [None, []])
    def test_nobody_active(self, store_result):
        players = FakePlayerStore(active_players=store_result)
        assert run(_service(players).get_recently_active_players()) == []

    def test_missing_region_is_sentinel(self):
        players = FakePlayerStore(active_players=[make_profile(region_id=None)])
        assert run(_service(players).get_recently_active_players())[0].region_id == -1
