"""
dropfour.interfaces - User interfaces for dropfour
"""

# Don't import anything here to avoid circular imports
__all__ = []
