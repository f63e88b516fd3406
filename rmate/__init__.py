"""
rmate: edit files from an SSH session in your local editor
Bootstraps the connection between a remote shell and a local rmate server
"""

__version__ = "0.3.0"
__date__ = "2026-10-19"
__author__ = "rmate contributors"
