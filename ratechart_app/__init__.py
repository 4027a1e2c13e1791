"""
RateChart App - Exchange Rate Chart Preparation Engine

Normalizes drifting economic time-series payloads (currency rates keyed by
date) into clean per-channel series and derives the axis and spacing
geometry a chart widget needs to render them.
"""

__version__ = "0.1.0"
__author__ = "RateChart Team"
