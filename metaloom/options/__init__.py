"""
This module provides a convenient entry point for setting global
configuration options for the metaloom package.
"""

from metaloom._utils import set_metaloom_option

__all__ = ["set_metaloom_option"]
