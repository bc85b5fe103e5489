"""Internal helpers shared by the async wrappers."""
