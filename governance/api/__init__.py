"""
governance/api package marker.
"""
