"""Content sources - bundled fallback lists and remote providers."""
