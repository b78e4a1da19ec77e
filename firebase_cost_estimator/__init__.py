"""
Firebase Cost Estimator.

Estimates the monthly Firebase / Google Cloud bill from projected usage
and shows how long a fixed budget would last.
"""

__version__ = "0.1.0"
