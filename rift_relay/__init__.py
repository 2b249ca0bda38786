"""
Rift Relay

Overlay data relay for League of Legends: champion select from the League
Client and live game stats from the Live Client Data API.
"""

__version__ = "0.1.0"
