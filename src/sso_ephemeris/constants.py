"""Fixed constants: body IDs, astronomical units, time epochs.

Body IDs follow the JPL HORIZONS numbering used in the body catalog.
"""

import math

# Body IDs (HORIZONS)
SUN_ID = 10
MERCURY_ID = 199
VENUS_ID = 299
MOON_ID = 301
EARTH_ID = 399
MARS_ID = 499
IO_ID = 501
EUROPA_ID = 502
GANYMEDE_ID = 503
CALLISTO_ID = 504
JUPITER_ID = 599
SATURN_ID = 699
URANUS_ID = 799
NEPTUNE_ID = 899

MAJOR_PLANET_IDS = (
    MERCURY_ID,
    VENUS_ID,
    MARS_ID,
    JUPITER_ID,
    SATURN_ID,
    URANUS_ID,
    NEPTUNE_ID,
)
GALILEAN_MOON_IDS = (IO_ID, EUROPA_ID, GANYMEDE_ID, CALLISTO_ID)

# Lengths
DAU = 149597870700.0  # astronomical unit (m)
AU_KM = DAU / 1000.0
SUN_RADIUS_M = 695508000.0
JUPITER_RADIUS_KM = 71492.0

# Time
SECONDS_PER_DAY = 86400.0
DJM0 = 2400000.5  # MJD zero point as a Julian Date
DJM00 = 51544.5  # MJD of J2000.0
DJC = 36525.0  # days per Julian century
TT_MINUS_TAI = 32.184  # seconds

# Angles
DD2R = math.pi / 180.0
DR2D = 180.0 / math.pi
DAS2R = DD2R / 3600.0
AU_TO_PARSEC = math.pi / 648000.0

# Physics
GRAVITATIONAL_CONSTANT = 6.674e-11  # m^3 kg^-1 s^-2

# Photometry
SUN_ABSOLUTE_VMAG = 4.83
MIN_ECLIPSE_FACTOR = 0.000128

# Coarse cache revalidation interval range (seconds of TT)
UPDATE_DELTA_MIN_S = 1.0
UPDATE_DELTA_SPREAD_S = 1.0

# Rendering contract
DEFAULT_SHADOW_CANDIDATES = 4
MIN_ORBIT_PIXEL_RADIUS = 1.5
