"""Policy cache application layer.

Services orchestrating the cache core and the invalidation dispatcher,
plus handlers wiring domain events to invalidations.
"""

from .services import *
from .handlers import *
