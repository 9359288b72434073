"""
dropfour.data - Storage for saved dropfour games
"""

from dropfour.data.saves import SaveStore

__all__ = ['SaveStore']
