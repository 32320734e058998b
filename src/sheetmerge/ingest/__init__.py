"""File selection, decoding and registry."""
