"""
Infrastructure package for the add-commitment function.

Centralizes store connectivity concerns (DynamoDB client creation). Keep this
layer focused on I/O and resource management, decoupled from validation and
request handling.
"""

from add_commitment.infrastructure.dynamodb import client_kwargs, get_dynamodb_client

__all__ = [
    "client_kwargs",
    "get_dynamodb_client",
]
