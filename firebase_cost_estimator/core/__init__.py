"""
Core modules for Firebase Cost Estimator.

This package contains the price table, usage records, the pricing
function, budget coverage and the recalculating calculator state.
"""
