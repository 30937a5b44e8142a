import threading
import unittest
from concurrent.futures import ThreadPoolExecutor

from game import (
    Applied,
    Finished,
    GameOver,
    GameRegistry,
    GameSession,
    InvalidMove,
    Phase,
    Player,
    Rejected,
    UnknownGame,
    create_board,
)


class TestGameSession(unittest.TestCase):
    def test_given_session_when_make_move_then_snapshot_returned(self):
        s = GameSession(1)
        self.assertEqual(s.uri, "/games/1")
        snap = s.make_move(1)
        self.assertEqual(dict(snap)[7], 1)
        self.assertEqual(s.status(), dict(snap))
        self.assertEqual(s.current_player, Player.FIRST)
        self.assertEqual(s.phase, Phase.STARTED)
        with self.assertRaises(InvalidMove):
            s.make_move(1)

    def test_given_ending_fixture_when_make_move_then_game_over_propagates(self):
        s = GameSession(3, create_board(6))
        s.load_pits([0, 0, 0, 0, 1, 0, 19, 0, 0, 0, 0, 0, 0, 10])
        with self.assertRaises(GameOver) as ctx:
            s.make_move(5)
        self.assertEqual(ctx.exception.score, (20, 10))
        self.assertEqual(s.scores(), (20, 10))
        res = s.play(5)
        self.assertIsInstance(res, Finished)
        self.assertEqual(s.legal_moves(), [])

    def test_given_session_when_play_then_tagged_results(self):
        s = GameSession(2)
        self.assertIsInstance(s.play(14), Rejected)
        res = s.play(2)
        self.assertIsInstance(res, Applied)
        self.assertEqual(res.current_player, Player.SECOND)
        s.current_player = Player.FIRST
        self.assertEqual(s.current_player, Player.FIRST)

    def test_given_session_when_viewing_then_all_fields_from_one_state(self):
        s = GameSession(4)
        v = s.view()
        self.assertEqual(len(v.snapshot), 14)
        self.assertEqual(v.current_player, Player.FIRST)
        self.assertEqual(v.phase, Phase.INITIAL)
        self.assertEqual(v.legal_moves, (1, 2, 3, 4, 5, 6))
        s.make_move(2)
        v2 = s.view()
        self.assertEqual(dict(v2.snapshot)[2], 0)
        self.assertEqual(v2.current_player, Player.SECOND)
        self.assertEqual(v2.phase, Phase.STARTED)
        self.assertEqual(v2.legal_moves, (8, 9, 10, 11, 12, 13))

    def test_given_concurrent_moves_on_one_game_when_applied_then_stones_conserved(self):
        s = GameSession(1)
        pits = [p for p in range(1, 14) if p != 7] * 40

        def worker(pit):
            return s.play(pit)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(worker, pits))

        for r in results:
            self.assertIsInstance(r, (Applied, Rejected, Finished))
        self.assertTrue(any(isinstance(r, Applied) for r in results))
        snap = s.snapshot()
        self.assertEqual(sum(v for _, v in snap), 72)
        self.assertTrue(all(v >= 0 for _, v in snap))

    def test_given_one_game_locked_when_moving_another_then_not_blocked(self):
        a = GameSession(1)
        b = GameSession(2)
        done = threading.Event()

        def move_b():
            b.make_move(3)
            done.set()

        with a._lock:
            t = threading.Thread(target=move_b)
            t.start()
            self.assertTrue(done.wait(timeout=5))
            t.join(timeout=5)
        self.assertEqual(b.phase, Phase.STARTED)
        self.assertEqual(a.phase, Phase.INITIAL)


class TestGameRegistry(unittest.TestCase):
    def test_given_registry_when_creating_then_ids_increase_from_one(self):
        reg = GameRegistry()
        g1 = reg.create()
        g2 = reg.create(uri_prefix="http://localhost:8080/games/")
        self.assertEqual(g1.game_id, 1)
        self.assertEqual(g2.game_id, 2)
        self.assertEqual(g1.uri, "/games/1")
        self.assertEqual(g2.uri, "http://localhost:8080/games/2")
        self.assertEqual(len(reg), 2)
        self.assertIn(1, reg)
        self.assertIs(reg.get(2), g2)
        self.assertEqual(reg.ids(), [1, 2])

    def test_given_unknown_or_discarded_id_when_accessing_then_unknown_game(self):
        reg = GameRegistry()
        with self.assertRaises(UnknownGame) as ctx:
            reg.get(99999999)
        self.assertEqual(str(ctx.exception), "This game is not created yet")
        g = reg.create()
        reg.discard(g.game_id)
        self.assertNotIn(g.game_id, reg)
        with self.assertRaises(UnknownGame):
            reg.get(g.game_id)
        with self.assertRaises(UnknownGame):
            reg.discard(g.game_id)
        # Ids are never reused
        self.assertEqual(reg.create().game_id, 2)

    def test_given_variant_settings_when_creating_then_boards_follow_them(self):
        reg = GameRegistry(stones_per_pit=4, infer_player=True)
        g = reg.create()
        self.assertEqual(g.pit_count, 10)
        self.assertEqual(len(g.snapshot()), 10)
        self.assertEqual(len(g.legal_moves()), 8)

    def test_given_concurrent_creators_when_creating_then_ids_unique_and_dense(self):
        reg = GameRegistry()
        with ThreadPoolExecutor(max_workers=8) as pool:
            sessions = list(pool.map(lambda _: reg.create(), range(200)))
        ids = [s.game_id for s in sessions]
        self.assertEqual(sorted(ids), list(range(1, 201)))
        self.assertEqual(len(reg), 200)


if __name__ == "__main__":
    unittest.main(verbosity=2)
