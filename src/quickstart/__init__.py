"""Top-level quickstart procedure.

Public API:
    - QuickstartRunner: Authorizes, lists messages and shows the chosen one
"""

from .runner import QuickstartRunner

__all__ = ["QuickstartRunner"]
