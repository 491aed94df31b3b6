"""Parsers for npm manifests and semver range expressions."""
