"""
Services around the game engine: rendering, the tick clock and the session
that ties them together.
"""
