"""
teleshell - run shell commands from a Telegram chat.
"""

__version__ = "0.1.0"
