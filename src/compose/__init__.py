"""Notebook document composition.

This module writes the Typst documents that apply the notebook template
transform, checks them before rendering, and drives the Typst renderer.
"""
