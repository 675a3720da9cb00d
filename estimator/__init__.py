"""
Material estimation and pricing engine for construction trades.
"""
