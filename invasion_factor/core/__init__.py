"""
Core cross-cutting pieces shared by scoring, calibration and the engine.

Provides the domain exception hierarchy.
"""
