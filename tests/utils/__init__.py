"""
Test Utilities
==============

Fakes and helpers for testing.
"""

from .mocks import *
from .helpers import *
