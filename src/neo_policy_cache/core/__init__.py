"""Policy cache core domain.

Entities, value objects, events, exceptions and protocols shared by
the infrastructure and application layers.
"""

from .entities import *
from .events import *
from .exceptions import *
from .protocols import *
from .value_objects import *
