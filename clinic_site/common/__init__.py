"""
Shared runtime helpers for settings, logging, and schema definitions.
These modules are imported by both the API process and the maintenance scripts.
"""
