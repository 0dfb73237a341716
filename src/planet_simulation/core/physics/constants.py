from __future__ import annotations

# Gravitational constant, m^3 kg^-1 s^-2.
G = 6.67428e-11

# Mean Earth-Sun distance in meters.
AU = 149.6e6 * 1000.0

# Added in quadrature to every pairwise separation so forces stay bounded.
SOFTENING_LENGTH = 1.0e9

SECONDS_PER_DAY = 3600.0 * 24.0

DEFAULT_DT = SECONDS_PER_DAY
