"""
Scenario configuration for Firebase Cost Estimator.
"""
