"""
Command line entry points.

Scripts:
    run_sync: Load every configured collection and export it as JSON
"""
