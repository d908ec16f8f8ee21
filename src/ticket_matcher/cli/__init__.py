"""
CLI module for similar-conversation matching.
"""

from ticket_matcher.cli.match import main as match_main

__all__ = ["match_main"]
