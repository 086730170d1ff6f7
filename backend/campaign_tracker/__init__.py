"""
Campaign Tracker backend.
"""
