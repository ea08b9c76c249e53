"""Discord enrollment bot: /enrollment form, university roles, link relay."""

__version__ = "0.1.0"
