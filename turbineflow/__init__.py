from .turbine import Turbine, build_from_parts
from .optimize import TurbineOptimizer, TurbineFlow, DimensionLimits, NoFeasibleTurbineError, TurbineDimensionWarning, search_optimal, check_dimensions
