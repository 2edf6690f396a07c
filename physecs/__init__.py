"""Rigid body physics building blocks: math helpers, bounds, BVH, clipping, contact tests and constraints."""

__version__ = "0.1.0"