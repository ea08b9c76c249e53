"""Entry point for running the Discord adapter as a module.

Usage:
    python -m enrollbot.adapters.discord
"""

from enrollbot.adapters.discord.main import run

if __name__ == "__main__":
    run()
