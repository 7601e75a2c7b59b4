# %%
from turbineflow import TurbineOptimizer, build_from_parts

optimizer = TurbineOptimizer(9, 11, verbose=True)
turbine = optimizer.optimize()
print(turbine)
optimizer.visualize("9x9x11 Turbine")

# %%
manual_turbine = build_from_parts(9, 11, condenser_count=48, disperser_count=48, vent_count=105, shaft_height=5, blade_count=10, coil_count=2)
print(manual_turbine.to_dict())

# %%
