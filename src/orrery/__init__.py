"""Earth-Moon-Sun ephemeris and display-frame engine.

The package turns a UTC instant into a snapshot of a three-body system:
- Orbital model: low-order series for the Earth's orbit, the Moon's orbit and
  the Earth's rotation
- Observer model: a point on the Earth's surface with solar and lunar angles
- Phenomena: lunar phase and eclipse alignment
- Display frames: geocentric, heliocentric and selenocentric re-projections

All computations are pure functions of their arguments; see ``orrery.engine``.
"""

from orrery.engine import compute_state
from orrery.frames import FrameSelector
from orrery.models import ObserverLocation, State
from orrery.time_utils import J2000, Instant

__all__: list[str] = [
    'J2000',
    'FrameSelector',
    'Instant',
    'ObserverLocation',
    'State',
    'compute_state',
]
