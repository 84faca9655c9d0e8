"""Tests for headless batch runs."""

from shaft_crawler.config import GameConfig
from shaft_crawler.sim.play_agents.base import PlayAgent
from shaft_crawler.sim.runner import BatchRunner, run_single_session


class _IdleAgent(PlayAgent):
    def choose_action(self, snapshot):
        return None


class TestBatchRunner:
    def test_one_result_per_seed(self):
        results = BatchRunner().run_batch(3, base_seed=10, max_ticks=50)
        assert [r.seed for r in results] == [10, 11, 12]

    def test_deterministic(self):
        first = BatchRunner().run_batch(2, base_seed=7, max_ticks=300)
        second = BatchRunner().run_batch(2, base_seed=7, max_ticks=300)
        assert first == second

    def test_tick_cap_reports_timeout(self):
        results = BatchRunner(_IdleAgent).run_batch(1, max_ticks=5)
        assert results[0].final_result == "timeout"
        assert results[0].ticks == 5
        assert results[0].time_left == 895

    def test_short_countdown_climbs_out(self):
        runner = BatchRunner(config=GameConfig(max_time=30))
        results = runner.run_batch(3, max_ticks=100)
        assert all(r.final_result == "victory" for r in results)

    def test_idle_agent_runs_out_of_time(self):
        result = run_single_session(_IdleAgent(), seed=1, config=GameConfig(max_time=20), max_ticks=100)
        assert result.final_result == "gameover"
        assert result.ticks == 20

    def test_full_run_ends(self):
        results = BatchRunner(config=GameConfig(max_time=200)).run_batch(3, max_ticks=1000)
        for r in results:
            assert r.final_result in ("victory", "gameover")
            assert r.rooms_visited >= 1
            assert r.final_level >= 1
