"""
Process lifecycle for willowbank.

Startup opens and migrates the store; shutdown closes it.
"""

from willowbank.background.lifecycle import ServerLifecycle

__all__ = ["ServerLifecycle"]
