"""
Command-line interface for Tanuki.
"""
