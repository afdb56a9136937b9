"""
Esports Bracket Engine - knockout and group-advancement brackets.
"""
__version__ = "0.1.0"
