"""
Shared league models.

Entity records, game/schedule records, the league snapshot and the
exceptions raised when folding data into it.
"""
