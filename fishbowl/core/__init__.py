"""Core game engine (players, clues, bowl, turns, rounds and the game aggregate).

Kept free of FastAPI and Redis concerns so it can be driven by the command layer, the turn timer and tests.
"""
