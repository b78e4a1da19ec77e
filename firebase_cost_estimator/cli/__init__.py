"""
Command-line interface for Firebase Cost Estimator.
"""
