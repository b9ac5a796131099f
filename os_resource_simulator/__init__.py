"""
OS resource simulator.
Deterministic CPU scheduling, page replacement, disk scheduling and
Banker's safety simulations.
"""

__version__ = "0.1.0"
