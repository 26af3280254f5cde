"""
Runtime support: error model and textual encodings.
"""

from .errors import *
from .encoding import *
