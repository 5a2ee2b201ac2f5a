"""Integration test package.

These tests load a small JSON snapshot and run it through the engine, the
exporters and the command line. They need no network access.
"""
