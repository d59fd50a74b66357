"""Policy cache infrastructure.

Concrete storage and eviction policy implementations.
"""

from .stores import *
from .policies import *
