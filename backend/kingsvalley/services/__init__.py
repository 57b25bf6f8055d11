"""Game domain services: board rules, room bookkeeping and housekeeping.

Pure(ish) game logic imported by the socket handlers and HTTP routes,
keeping transport concerns separated from core game mechanics.
"""
