"""
Trade calculation engine.

Pure Python math. Given a trade's measurement inputs and a price resolver,
produce an ordered list of line items with quantities, units, and costs.
"""
