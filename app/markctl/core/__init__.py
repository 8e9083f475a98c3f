"""Core staging logic: settings, persistence, the staging area and exec."""
