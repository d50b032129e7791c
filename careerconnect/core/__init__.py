"""
Core module - settings, authentication helpers and logging setup.
"""
