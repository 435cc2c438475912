"""
Invasion Factor — scoring and calibration engine for spheroid invasion assays.

Combines morphological measurements and per-time explainability weights into
a raw invasion factor, classifies the sample's recent trend, and recalibrates
the raw score against a precomputed group- and time-dependent sigmoid model.
"""

__version__ = "0.1.0"
