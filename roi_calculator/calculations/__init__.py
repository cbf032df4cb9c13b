"""
ROI Calculation Engine

Pure calculation and formatting modules for the PowerShops ROI calculator.
Nothing here performs I/O or keeps state between calls.
"""

from roi_calculator.calculations import roi, formatting

__all__ = ["roi", "formatting"]
