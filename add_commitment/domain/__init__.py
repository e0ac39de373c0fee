"""
Domain package for the add-commitment function.

Exports the commitment record schema and the write result contract.
Keep this package focused on data definitions and validation concerns.
"""

from add_commitment.domain.models import CommitmentRecord, WriteResult

__all__ = [
    "CommitmentRecord",
    "WriteResult",
]
