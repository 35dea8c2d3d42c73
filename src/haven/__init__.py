"""
Sensory Haven - Guided Breathing Backend

This package provides the guided breathing session engine behind the
Sensory Haven calming hub, plus the HTTP surface the UI talks to.

Everything else in the hub (routing, favourites, canvases) lives
outside this package.
"""

__version__ = "0.1.0"
__author__ = "Sensory Haven Engineering Team"
