"""Entry point for `python -m enrollbot`."""

from enrollbot.adapters.discord.main import run

if __name__ == "__main__":
    run()
