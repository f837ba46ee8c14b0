"""
governance package marker.
"""
