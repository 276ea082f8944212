"""
HTTP adapter for the presentation layer.
"""
