from dataclasses import dataclass, field
from functools import cached_property, partial
import multiprocessing
from typing import List, Optional
import warnings
import numpy as np
import plotly.graph_objects as go
from turbineflow.formulas import (
    coils_needed,
    lower_volume,
    max_flow_rate,
    max_vents,
    optimal_condensers,
    pressure_dispersers,
    tank_flow_rate,
    vent_flow_rate,
    water_output,
)
from turbineflow.turbine import Turbine

MAX_SHAFT_HEIGHT = 14
"tallest shaft the rotor supports (blocks)"


class NoFeasibleTurbineError(ValueError):
    def __init__(self, cross_section: int, height: int):
        super().__init__(f"No feasible turbine for {cross_section}x{cross_section}x{height}, every shaft height leaves no room for condensers")
        self.cross_section = cross_section
        self.height = height


class TurbineDimensionWarning(UserWarning):
    pass


@dataclass(frozen=True)
class DimensionLimits:
    min_cross_section: int = 5
    "smallest supported width and length (blocks)"

    max_cross_section: int = 17
    "largest supported width and length (blocks)"

    min_height: int = 5
    "smallest supported height (blocks)"

    max_height: int = 17
    "largest supported height (blocks)"


@dataclass
class TurbineFlow:
    shaft_height: int
    "height of the rotor shaft (blocks)"

    vent_count: int
    "vent count closest to the tank flow"

    condenser_count: int
    "condensers for the flow, non positive when they do not fit"

    max_flow_rate: int
    "bottleneck limited gas flow (mB/t)"

    max_water_output: int
    "water reclaimed by the condensers (mB/t)"


def check_dimensions(cross_section: int, height: int, limits: DimensionLimits = DimensionLimits()) -> List[str]:
    "advisories for dimensions outside the supported range, computation still proceeds with them"
    advisories = []
    if cross_section < limits.min_cross_section:
        advisories.append(f"Turbine length and width too small, min {limits.min_cross_section} by {limits.min_cross_section} blocks.")
    elif cross_section > limits.max_cross_section:
        advisories.append(f"Turbine length and width too large, max {limits.max_cross_section} by {limits.max_cross_section} blocks.")

    if height < limits.min_height:
        advisories.append(f"Turbine height too small, min {limits.min_height} blocks.")
    elif height > limits.max_height:
        advisories.append(f"Turbine height too large, max {limits.max_height} blocks.")
    return advisories


def shaft_height_range(height: int) -> range:
    "shaft heights that keep the blades clear of the outer wall"
    return range(1, min(2*height - 5, MAX_SHAFT_HEIGHT))


def closest_vent_count(tank_flow: int, vent_limit: int) -> int:
    """
    Get the vent count in [0, vent_limit) whose vent flow is closest to the tank flow

    Counts are scanned in descending order and argmin keeps the first minimum,
    so the highest vent count wins a tie.
    """
    if vent_limit <= 0:
        return 0
    vent_counts = np.arange(vent_limit)[::-1]
    differences = np.abs(tank_flow - vent_flow_rate(vent_counts))
    return int(vent_counts[np.argmin(differences)])


def evaluate_shaft_height(cross_section: int, height: int, shaft_height: int) -> TurbineFlow:
    tank_flow = tank_flow_rate(cross_section, shaft_height)
    vent_count = closest_vent_count(tank_flow, max_vents(cross_section, height, shaft_height))
    max_flow = max_flow_rate(cross_section, shaft_height, vent_count)
    condensers = optimal_condensers(cross_section, height, shaft_height, shaft_height*2, max_flow)
    return TurbineFlow(
        shaft_height=shaft_height,
        vent_count=vent_count,
        condenser_count=condensers,
        max_flow_rate=max_flow,
        max_water_output=water_output(condensers),
    )


@dataclass
class TurbineOptimizer:
    cross_section: int
    "interior width and length of the square footprint (blocks)"

    height: int
    "interior height (blocks)"

    limits: DimensionLimits = field(default_factory=DimensionLimits)
    "supported dimension range, only used for advisories"

    num_procs: int = 1
    "number of processes evaluating shaft heights"

    verbose: bool = False
    "print every evaluated candidate"

    def __post_init__(self):
        assert self.num_procs >= 1, "num_procs must be at least 1"
        self.advisories = check_dimensions(self.cross_section, self.height, self.limits)

    @cached_property
    def candidates(self) -> List[TurbineFlow]:
        "candidates for every shaft height, in ascending shaft height"
        shaft_heights = list(shaft_height_range(self.height))
        evaluate = partial(evaluate_shaft_height, self.cross_section, self.height)
        if self.num_procs > 1 and len(shaft_heights) > 1:
            with multiprocessing.Pool(self.num_procs) as pool:
                candidates = pool.map(evaluate, shaft_heights)
        else:
            candidates = [evaluate(shaft_height) for shaft_height in shaft_heights]

        if self.verbose:
            for candidate in candidates:
                print(f"Evaluated {candidate}")
        return candidates

    @property
    def feasible_candidates(self) -> List[TurbineFlow]:
        return [candidate for candidate in self.candidates if candidate.condenser_count > 0]

    def best_candidate(self) -> TurbineFlow:
        "feasible candidate with the highest flow rate, the shortest shaft wins a tie"
        feasible = self.feasible_candidates
        if not feasible:
            raise NoFeasibleTurbineError(self.cross_section, self.height)
        max_flows = np.array([candidate.max_flow_rate for candidate in feasible])
        return feasible[int(np.argmax(max_flows))]

    def optimize(self) -> Turbine:
        for advisory in self.advisories:
            warnings.warn(advisory, TurbineDimensionWarning, stacklevel=2)

        best = self.best_candidate()
        shaft_height = best.shaft_height
        coils = coils_needed(shaft_height*2)
        condensers = optimal_condensers(self.cross_section, self.height, shaft_height, coils, best.max_flow_rate)
        return Turbine(
            cross_section=self.cross_section,
            height=self.height,
            vent_count=best.vent_count,
            disperser_count=pressure_dispersers(self.cross_section),
            shaft_height=shaft_height,
            blade_count=shaft_height*2,
            coil_count=coils,
            condenser_count=condensers,
            energy_capacity=0,
            max_flow_rate=best.max_flow_rate,
            tank_volume=lower_volume(self.cross_section, shaft_height),
            max_water_output=water_output(condensers),
        )

    def visualize(self, title: str = "Turbine Flow", show=True, save_path: Optional[str] = None):
        fig = go.Figure(layout=go.Layout(title=go.layout.Title(text=title)))
        shaft_heights = [candidate.shaft_height for candidate in self.candidates]
        fig.add_trace(go.Scatter(x=shaft_heights, y=[candidate.max_flow_rate for candidate in self.candidates], name="Max Flow Rate"))
        fig.add_trace(go.Scatter(x=shaft_heights, y=[candidate.max_water_output for candidate in self.candidates], name="Max Water Output"))
        fig.update_layout(xaxis_title="Shaft Height", yaxis_title="mB/t")

        if save_path:
            fig.write_image(save_path)
        if show:
            fig.show()
        return fig


def search_optimal(
    cross_section: int,
    height: int,
    limits: DimensionLimits = DimensionLimits(),
    num_procs: int = 1,
    verbose: bool = False,
) -> Turbine:
    """
    Get the turbine with the highest flow rate that fits the given dimensions

    Raises NoFeasibleTurbineError when no shaft height leaves room for a condenser.
    """
    return TurbineOptimizer(cross_section, height, limits, num_procs, verbose).optimize()
