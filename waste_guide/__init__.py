"""
Waste Guide - location-aware waste disposal guidance.

Core package for resolving a reported position to a service zone.
"""

__version__ = "0.1.0"
