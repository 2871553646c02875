EARTH_RADIUS_KM = 6371.0

START = "START"
GOAL = "GOAL"

# Endpoints sit one meter above the surface so the line-of-sight test does not
# start exactly on the sphere.
ENDPOINT_ALTITUDE_KM = 0.001

MIN_STEP_KM = 0.0001

# Frontier priorities closer than this are treated as equal.
FRONTIER_EPSILON = 1e-4

# Relative band around the sphere radius inside which the pre-filter defers
# to ray marching.
PREFILTER_MARGIN = 1e-4
