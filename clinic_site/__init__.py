"""
Package marker for the clinic website backend.
It groups the API, services, and shared helpers under one stable import path.
Most functionality lives in the sibling packages; this file intentionally stays lightweight.
"""
