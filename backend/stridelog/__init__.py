"""
StrideLog: activity tracking backend.

Records GPS routes for running/cycling sessions, stores activity history
and serves it back for map display.
"""

__version__ = "0.1.0"
