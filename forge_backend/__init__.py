"""Forge Assistant - simulated AI code generation backend"""

__version__ = "1.0.0"
