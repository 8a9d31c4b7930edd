"""
Automation ROI.

Return-on-investment metrics for automation initiatives.
"""

__version__ = "0.1.0"
