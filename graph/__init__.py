"""Graph data model for module identities and dependency records."""
