"""Ports the indexing engine consumes: search backend, record persistence, shaping."""
