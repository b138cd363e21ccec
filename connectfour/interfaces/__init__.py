"""
connectfour.interfaces - User interfaces for Connect Four

Front ends that drive a ConnectFourGame through its public methods only.
"""

# Don't import anything here to avoid circular imports
__all__ = []
