"""
Utility functions module.

Number and date label formatting shared by the chart builders.
"""
