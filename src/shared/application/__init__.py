"""
Shared Application Layer
CQRS command/query contracts
"""
