"""Solar System object ephemeris engine.

Computes, per frame, the observed state of a hierarchy of bodies (Sun,
planets, moons, minor bodies) as seen from a moving observer:

- Heliocentric positions from analytic series (ERFA planets, a lunar series,
  Galilean satellite theory) or two-body elements, cached per body
- Apparent positions with light-time correction, cached per observer state
- Visual magnitudes, phases and angular sizes, including eclipse dimming
- Shadow-caster candidates and osculating orbits for a rendering layer

Body data comes from an INI catalog; times are converted with rms-julian.
"""

__all__: list[str] = []
