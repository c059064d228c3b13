"""
Scripts

Command-line tools built on the rate card engine.
"""
