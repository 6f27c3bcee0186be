"""Fixed constants: scene scale, orbital series coefficients, display tuning.

Distances are in engine scale units (roughly 1 unit = 1000 km for bodies and
orbits), not kilometers.
"""

import math

TWOPI = 2.0 * math.pi

# Time
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
MINUTES_PER_DAY = 1440.0
HOURS_PER_DAY = 24.0
J2000_JULIAN_DAY = 2451545.0

# Angle
DEGREES_PER_CIRCLE = 360.0
HALF_CIRCLE_DEGREES = 180.0
DEGREES_PER_HOUR = 15.0  # rotation: 360° / 24 h

# Earth size and orbit radii (scaled)
EARTH_RADIUS = 6.371
EARTH_SUN_DISTANCE = 234.7  # 149.6M km scaled
MOON_EARTH_DISTANCE = 60.27  # 384,400 km scaled
MOON_DISTANCE_PERTURBATION_SCALE = 0.01

# Earth orbit (degrees, degrees/day)
EARTH_MEAN_ANOMALY_J2000 = 357.5291
EARTH_MEAN_ANOMALY_RATE = 0.98560028
EARTH_CENTER_COEFFS = (1.9148, 0.0200, 0.0003)  # sin M, sin 2M, sin 3M
EARTH_PERIHELION_LONGITUDE = 102.9373

# Moon orbit (degrees, degrees/day)
MOON_MEAN_LONGITUDE_J2000 = 218.3164477
MOON_MEAN_LONGITUDE_RATE = 13.17639648
MOON_MEAN_ANOMALY_J2000 = 134.9633964
MOON_MEAN_ANOMALY_RATE = 13.06499295
MOON_ARG_LATITUDE_J2000 = 93.2720950
MOON_ARG_LATITUDE_RATE = 13.22935397

# Sidereal time (hours, hours/day)
GMST_J2000_HOURS = 18.697374558
GMST_RATE_HOURS = 24.06570982441908

# Display distances per (frame, target body); visual tuning, not physical.
GEOCENTRIC_MOON_DISTANCE = 30.0
GEOCENTRIC_SUN_DISTANCE = 80.0
HELIOCENTRIC_EARTH_DISTANCE = 60.0
HELIOCENTRIC_MOON_DISTANCE = 15.0
SELENOCENTRIC_EARTH_DISTANCE = 25.0
SELENOCENTRIC_SUN_DISTANCE = 80.0
HELIOCENTRIC_MOON_INCLINATION_DEG = 5.14  # tilt of the Moon offset about +X

# Phenomena
ECLIPSE_ALIGNMENT_THRESHOLD = 0.99
PHASE_BUCKET_DEGREES = 45.0
PHASE_NAMES = (
    'New',
    'Waxing Crescent',
    'First Quarter',
    'Waxing Gibbous',
    'Full',
    'Waning Gibbous',
    'Third Quarter',
    'Waning Crescent',
)

# Observer defaults (configuration)
DEFAULT_LATITUDE = 45.0
DEFAULT_LONGITUDE = 45.0
DEFAULT_INTERVAL = 1.0
DEFAULT_MIN_INTERVAL_SECONDS = 1.0
MAX_EPHEMERIS_STEPS = 100000
