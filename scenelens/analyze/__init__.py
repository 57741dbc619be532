"""
scenelens.analyze - Per-scene detectors.

Text statistics, emotion, point of view, intensity, conflict and tags.
Each detector is a pure function of its inputs and returns a TrackedValue
with source 'auto'.
"""

from __future__ import annotations
