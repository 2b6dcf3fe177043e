"""
Cricket Live Scoring Engine

Ball-by-ball scoring for a single cricket innings: forward application
of deliveries, exact undo of the most recent delivery, and the session
controller that serialises both against persisted state.
"""

__version__ = "0.1.0"
