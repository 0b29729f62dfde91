"""Zero Token Leaderboard.

A single-page leaderboard for the Zero token: holder balances and counters
from the block explorer, ENS-style handles from the Zerion identity API.
"""

__version__ = "0.1.0"
