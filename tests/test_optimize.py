import dataclasses
import warnings
import pytest
from turbineflow import (
    DimensionLimits,
    NoFeasibleTurbineError,
    TurbineDimensionWarning,
    TurbineOptimizer,
    check_dimensions,
    search_optimal,
)
from turbineflow.formulas import CONDENSER_RATE, max_flow_rate, tank_flow_rate
from turbineflow.optimize import closest_vent_count, evaluate_shaft_height, shaft_height_range


def test_search_optimal():
    turbine = search_optimal(5, 5)
    assert turbine.vent_count == 8
    assert turbine.disperser_count == 8
    assert turbine.shaft_height == 1
    assert turbine.blade_count == 2
    assert turbine.coil_count == 2
    assert turbine.condenser_count == 4
    assert turbine.max_flow_rate == 256_000
    assert turbine.tank_volume == 25
    assert turbine.max_water_output == 256_000
    assert turbine.energy_capacity == 0
    assert turbine.max_energy_production == 0.0


@pytest.mark.parametrize("cross_section, height", [(5, 5), (7, 9), (9, 11), (13, 6), (17, 17)])
def test_search_optimal_invariants(cross_section, height):
    turbine = search_optimal(cross_section, height)
    assert turbine.shaft_height < height
    assert turbine.blade_count == 2 * turbine.shaft_height
    assert turbine.condenser_count > 0
    assert turbine.max_flow_rate == max_flow_rate(cross_section, turbine.shaft_height, turbine.vent_count)
    assert turbine.max_water_output == turbine.condenser_count * CONDENSER_RATE


def test_search_optimal_is_idempotent():
    assert search_optimal(9, 11) == search_optimal(9, 11)


def test_search_optimal_is_monotonic():
    sizes = range(5, 18, 3)
    for height in sizes:
        flows = [search_optimal(cross_section, height).max_flow_rate for cross_section in sizes]
        assert flows == sorted(flows)
    for cross_section in sizes:
        flows = [search_optimal(cross_section, height).max_flow_rate for height in sizes]
        assert flows == sorted(flows)


@pytest.mark.parametrize("cross_section, height", [(5, 3), (5, 4)])
def test_search_optimal_infeasible(cross_section, height):
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", TurbineDimensionWarning)
        with pytest.raises(NoFeasibleTurbineError) as exc_info:
            search_optimal(cross_section, height)
    assert exc_info.value.cross_section == cross_section
    assert exc_info.value.height == height


def test_infeasible_candidates_are_discarded():
    optimizer = TurbineOptimizer(5, 5)
    assert [candidate.shaft_height for candidate in optimizer.candidates] == [1, 2, 3, 4]
    assert [candidate.shaft_height for candidate in optimizer.feasible_candidates] == [1]


@pytest.mark.parametrize("cross_section, height, shaft_height", [(8, 11, 2), (5, 14, 7)])
def test_shortest_shaft_wins_flow_tie(cross_section, height, shaft_height):
    optimizer = TurbineOptimizer(cross_section, height)
    best = optimizer.best_candidate()
    tied = [candidate.shaft_height for candidate in optimizer.feasible_candidates if candidate.max_flow_rate == best.max_flow_rate]
    assert len(tied) > 1
    assert best.shaft_height == shaft_height == min(tied)
    assert search_optimal(cross_section, height).shaft_height == shaft_height


def test_dimension_limits_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DimensionLimits().max_height = 20  # type: ignore


def test_shaft_height_range():
    assert shaft_height_range(5) == range(1, 5)
    assert shaft_height_range(17) == range(1, 14)
    assert len(shaft_height_range(3)) == 0


def test_closest_vent_count_exact_match():
    assert closest_vent_count(tank_flow_rate(5, 1), 33) == 8


def test_closest_vent_count_prefers_highest_on_tie():
    # 48000 lies exactly between 1 and 2 vents
    assert closest_vent_count(48_000, 10) == 2


def test_closest_vent_count_capped_by_vent_limit():
    assert closest_vent_count(10**9, 10) == 9


def test_closest_vent_count_empty_range():
    assert closest_vent_count(256_000, 0) == 0
    assert closest_vent_count(256_000, -3) == 0


def test_evaluate_shaft_height():
    candidate = evaluate_shaft_height(5, 5, 2)
    assert candidate.vent_count == 16
    assert candidate.max_flow_rate == 512_000
    assert candidate.condenser_count == -4


def test_check_dimensions():
    assert check_dimensions(5, 17) == []
    assert len(check_dimensions(4, 18)) == 2
    assert len(check_dimensions(18, 5)) == 1
    assert check_dimensions(4, 4, DimensionLimits(min_cross_section=3, min_height=3)) == []


def test_out_of_range_dimensions_warn_but_compute():
    with pytest.warns(TurbineDimensionWarning):
        turbine = search_optimal(18, 9)
    assert turbine.cross_section == 18
    assert turbine.condenser_count > 0


def test_parallel_matches_serial():
    assert search_optimal(9, 11, num_procs=2) == search_optimal(9, 11)


def test_verbose_prints_candidates(capsys):
    search_optimal(5, 5, verbose=True)
    assert capsys.readouterr().out.count("TurbineFlow") == 4


def test_visualize():
    fig = TurbineOptimizer(9, 11).visualize(show=False)
    assert len(fig.data) == 2
    assert list(fig.data[0].x) == list(shaft_height_range(11))
