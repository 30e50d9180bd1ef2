"""
Shared Layer - Cross-Cutting Concerns
Configuration, errors, logging, persistence and application contracts
"""
