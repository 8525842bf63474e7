"""
HTTP surface for OnAir.
"""
