"""Adapters between host records and the repertoire domain."""
