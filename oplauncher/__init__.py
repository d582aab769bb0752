"""
oplauncher: keyboard launcher for the 1Password CLI.

Search, copy, generate and edit credentials by shelling out to `op`.
"""

__version__ = "0.1.0"
