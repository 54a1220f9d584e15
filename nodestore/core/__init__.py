"""Core nodestore components."""
