from dataclasses import asdict, dataclass
from typing import Any, Dict
from turbineflow.formulas import energy_capacity, lower_volume, max_flow_rate, water_output


@dataclass(frozen=True)
class Turbine:
    cross_section: int
    "interior width and length of the square footprint (blocks)"

    height: int
    "interior height (blocks)"

    vent_count: int
    "number of vents"

    disperser_count: int
    "number of pressure dispersers"

    shaft_height: int
    "height of the rotor shaft (blocks)"

    blade_count: int
    "number of turbine blades, two per shaft block"

    coil_count: int
    "number of electromagnetic coils"

    condenser_count: int
    "number of saturating condensers"

    energy_capacity: int
    "energy storage capacity"

    max_flow_rate: int
    "bottleneck limited gas flow (mB/t)"

    tank_volume: int
    "volume of the lower tank (blocks)"

    max_water_output: int
    "water reclaimed by the condensers (mB/t)"

    max_energy_production: float = 0.0
    "energy production per tick, not computed"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_from_parts(
    cross_section: int,
    height: int,
    condenser_count: int,
    disperser_count: int,
    vent_count: int,
    shaft_height: int,
    blade_count: int,
    coil_count: int,
) -> Turbine:
    """
    Create a turbine from already chosen parts, without searching

    Part counts are taken as given and are not checked against the geometry.
    """
    return Turbine(
        cross_section=cross_section,
        height=height,
        vent_count=vent_count,
        disperser_count=disperser_count,
        shaft_height=shaft_height,
        blade_count=blade_count,
        coil_count=coil_count,
        condenser_count=condenser_count,
        energy_capacity=energy_capacity(cross_section, height),
        max_flow_rate=max_flow_rate(cross_section, shaft_height, vent_count),
        tank_volume=lower_volume(cross_section, shaft_height),
        max_water_output=water_output(condenser_count),
    )
