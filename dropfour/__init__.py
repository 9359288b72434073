"""
dropfour - Rules engine for a Connect-Four-style drop-token game

This package provides the board model (gravity drops, turn switching, win
detection and the digit-per-move save format), a game manager, player input
sources, save slots and a text command-line shell.
"""

# Version number
__version__ = '0.1.0'
