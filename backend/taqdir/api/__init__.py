"""HTTP API for the Taqdir service."""
