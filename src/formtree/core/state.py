"""
Lifecycle states of a form node.
"""

from enum import Enum


class FormState(Enum):
    """Lifecycle state of a form node.

    A node moves from BUILDING to READY once construction finishes, then
    through SUBMITTED to VALID or INVALID for every submit cycle.
    """

    BUILDING = "building"
    READY = "ready"
    SUBMITTED = "submitted"
    VALID = "valid"
    INVALID = "invalid"

    def is_submitted(self) -> bool:
        """Check whether the node has received a submission."""
        return self in (FormState.SUBMITTED, FormState.VALID, FormState.INVALID)

    def is_valid(self) -> bool:
        """Check whether the node was submitted and passed validation."""
        return self is FormState.VALID

    def is_ready(self) -> bool:
        """Check whether construction has finished."""
        return self is not FormState.BUILDING
