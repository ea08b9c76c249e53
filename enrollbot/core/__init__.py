"""Platform-independent enrollment logic: models, message format, storage."""
