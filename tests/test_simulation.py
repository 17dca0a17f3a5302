"""
Tests for the random edge driver and simulation runner.
"""

import json

import numpy as np
import pytest

from dirflag.runtime.driver import RandomEdgeDriver
from dirflag.simulation import SimulationConfig, run_simulation, snapshot
from dirflag.topology.complex import SimplicialComplex


class TestConfig:
    def test_defaults(self):
        config = SimulationConfig()
        assert config.num_vertices == 30
        assert config.num_steps == 1000
        assert config.report_every == 100

    @pytest.mark.parametrize("kwargs", [
        {"num_vertices": 1},
        {"num_steps": -1},
        {"report_every": 0},
        {"removal_rate": 1.5},
    ])
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            SimulationConfig(**kwargs)


class TestDriver:
    def test_graph_mirrors_complex(self):
        cx = SimplicialComplex(range(8))
        driver = RandomEdgeDriver(cx, np.random.default_rng(0), removal_rate=0.3)
        for _ in range(150):
            driver.step()
        assert sorted(driver.graph.edges()) == sorted(cx.edges())
        assert driver.timestep == 150
        cx.check_invariants()

    def test_never_adds_reverse_edge(self):
        cx = SimplicialComplex(range(4))
        driver = RandomEdgeDriver(cx, np.random.default_rng(1))
        for _ in range(200):
            driver.step()
        for u, v in driver.graph.edges():
            assert not driver.graph.has_edge(v, u)
        # All six vertex pairs end up connected
        assert driver.graph.number_of_edges() == 6

    def test_step_result(self):
        cx = SimplicialComplex(range(2))
        driver = RandomEdgeDriver(cx, np.random.default_rng(2))
        first = driver.step()
        second = driver.step()
        assert len(first.added_edges) == 1
        assert second.added_edges == []

    def test_bad_removal_rate(self):
        with pytest.raises(ValueError):
            RandomEdgeDriver(SimplicialComplex(range(3)), np.random.default_rng(0), removal_rate=-0.1)

    def test_too_few_vertices(self):
        driver = RandomEdgeDriver(SimplicialComplex([0]), np.random.default_rng(0))
        with pytest.raises(ValueError):
            driver.step()


class TestSimulation:
    def test_reports(self):
        config = SimulationConfig(num_vertices=10, num_steps=95, report_every=20, seed=3)
        result = run_simulation(config)
        assert [r.step for r in result.reports] == [0, 20, 40, 60, 80, 94]
        last = result.reports[-1]
        assert last.counts == dict(result.complex.simplex_counts())
        assert last.betti == result.complex.betti_numbers()
        assert last.num_edges == result.graph.number_of_edges()

    def test_seed_is_reproducible(self):
        config = SimulationConfig(num_vertices=10, num_steps=120, report_every=30,
                                  removal_rate=0.2, seed=42)
        a = run_simulation(config)
        b = run_simulation(config)
        assert [r.to_dict() for r in a.reports] == [r.to_dict() for r in b.reports]

    def test_injected_rng(self):
        config = SimulationConfig(num_vertices=6, num_steps=40, report_every=10)
        a = run_simulation(config, rng=np.random.default_rng(9))
        b = run_simulation(config, rng=np.random.default_rng(9))
        assert sorted(a.graph.edges()) == sorted(b.graph.edges())

    def test_strict_run(self):
        config = SimulationConfig(num_vertices=9, num_steps=150, report_every=50,
                                  fill_cycles=False, removal_rate=0.1, seed=5)
        result = run_simulation(config)
        assert result.complex.fill_cycles is False
        result.complex.check_invariants()

    def test_to_dict_is_json(self):
        config = SimulationConfig(num_vertices=5, num_steps=10, report_every=5, seed=1)
        result = run_simulation(config)
        data = json.loads(json.dumps(result.to_dict()))
        assert data["config"]["seed"] == 1
        assert len(data["reports"]) == 3
        assert data["reports"][0]["counts"]["0"] == 5

    def test_snapshot(self):
        cx = SimplicialComplex(range(3))
        cx.insert_edge(0, 1)
        report = snapshot(7, cx)
        assert report.step == 7
        assert report.num_edges == 1
        assert report.betti == [2, 0]
