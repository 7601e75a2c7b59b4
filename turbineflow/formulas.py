import math

DISPERSER_GAS_FLOW = 1280
"gas flow per pressure disperser (mB/t)"

VENT_GAS_FLOW = 32000
"gas flow evacuated per vent (mB/t)"

CONDENSER_RATE = 64000
"water reclaimed per condenser (mB/t)"

ENERGY_PER_BLOCK = 16000
"energy stored per interior block"


def pressure_dispersers(cross_section: int) -> int:
    "number of pressure dispersers filling the rotor layer"
    return (cross_section - 2)**2 - 1


def lower_volume(cross_section: int, shaft_height: int) -> int:
    "volume of the lower tank surrounding the rotor shaft"
    return cross_section * cross_section * shaft_height


def max_vents(cross_section: int, height: int, shaft_height: int) -> int:
    """
    Get the number of vent slots on the top face plus the four side walls above the shaft
    """
    top_vents = (cross_section - 2)**2
    remaining_height = height - 2 - shaft_height
    side_vents = remaining_height * (cross_section - 2) * 4
    return top_vents + side_vents


def tank_flow_rate(cross_section: int, shaft_height: int) -> int:
    "gas production of the lower tank (mB/t)"
    return pressure_dispersers(cross_section) * DISPERSER_GAS_FLOW * lower_volume(cross_section, shaft_height)


def vent_flow_rate(vent_count: int) -> int:
    "gas evacuation of the vents (mB/t)"
    return vent_count * VENT_GAS_FLOW


def max_flow_rate(cross_section: int, shaft_height: int, vent_count: int) -> int:
    """
    Get the max flow rate, bounded by whichever of the tank and the vents is the bottleneck

    MAX_RATE = min(DISPERSERS * DISPERSER_GAS_FLOW * LOWER_VOLUME, VENTS * VENT_GAS_FLOW)
    """
    return min(tank_flow_rate(cross_section, shaft_height), vent_flow_rate(vent_count))


def coils_needed(blade_count: int) -> int:
    return max(math.ceil(blade_count / 4), 2)


def optimal_condensers(cross_section: int, height: int, shaft_height: int, coils: int, max_flow: int) -> int:
    """
    Get the number of condensers needed for the flow rate, capped by the space left above the shaft

    A negative result means the coils alone do not fit.
    """
    remaining_height = (height - 3) - shaft_height
    available_space = remaining_height * (cross_section - 2)**2 - coils
    # truncates toward zero
    condensers = -(-max_flow // CONDENSER_RATE) if max_flow < 0 else max_flow // CONDENSER_RATE
    return min(condensers, available_space)


def water_output(condenser_count: int) -> int:
    return condenser_count * CONDENSER_RATE


def energy_capacity(cross_section: int, height: int) -> int:
    "static energy storage of the structure"
    return cross_section**2 * height * ENERGY_PER_BLOCK
