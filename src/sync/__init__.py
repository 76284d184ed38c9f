"""Template package version synchronization.

This module keeps the pinned template package version in the notebook
config file aligned with what is installed in the local package cache.
"""
