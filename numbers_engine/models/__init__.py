"""Configuration models shared by every engine operation."""
