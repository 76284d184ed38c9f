"""Notebook entry scaffolding.

This module creates entry documents, registers them in the entries
index, and reads the entry types a theme offers.
"""
