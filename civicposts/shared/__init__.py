"""Cross-cutting code shared by every layer."""
