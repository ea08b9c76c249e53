"""Platform adapters for the enrollment bot."""
