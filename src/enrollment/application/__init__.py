"""Enrollment application layer: commands, queries and the withdrawal service."""
