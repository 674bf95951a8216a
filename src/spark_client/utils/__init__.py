"""
Utility modules for the Spark client.
"""

__all__ = ['logger']
