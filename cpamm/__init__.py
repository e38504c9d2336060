"""
cpamm: constant-product AMM pool engine.
"""

__version__ = "0.1.0"
