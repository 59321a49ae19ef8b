"""
Stack Status Value Objects

Architectural Intent:
- Partitions the provisioning service's status vocabulary into three disjoint
  classes: WAITING, SUCCESS and FAILURE
- DOES_NOT_EXIST is a synthetic sentinel for stacks the provider does not know,
  and never collides with a real status string
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)

DOES_NOT_EXIST = "DOES_NOT_EXIST"


class StatusClass(Enum):
    WAITING = "waiting"
    SUCCESS = "success"
    FAILURE = "failure"


WAITING_STATES = frozenset({
    "CREATE_IN_PROGRESS",
    "DELETE_IN_PROGRESS",
    "ROLLBACK_IN_PROGRESS",
    "UPDATE_IN_PROGRESS",
    "UPDATE_COMPLETE_CLEANUP_IN_PROGRESS",
    "UPDATE_ROLLBACK_IN_PROGRESS",
    "UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS",
    "REVIEW_IN_PROGRESS",
    "IMPORT_IN_PROGRESS",
    "IMPORT_ROLLBACK_IN_PROGRESS",
})

SUCCESS_STATES = frozenset({
    "CREATE_COMPLETE",
    "UPDATE_COMPLETE",
    "DELETE_COMPLETE",
    "IMPORT_COMPLETE",
})

FAILURE_STATES = frozenset({
    "CREATE_FAILED",
    "DELETE_FAILED",
    "ROLLBACK_FAILED",
    "ROLLBACK_COMPLETE",
    "UPDATE_FAILED",
    "UPDATE_ROLLBACK_FAILED",
    "UPDATE_ROLLBACK_COMPLETE",
    "IMPORT_ROLLBACK_COMPLETE",
    "IMPORT_ROLLBACK_FAILED",
})

END_STATES = SUCCESS_STATES | FAILURE_STATES


def classify(status: str) -> StatusClass:
    """Return the status class of a provider status string.

    Unknown strings are treated as in-progress. The DOES_NOT_EXIST sentinel
    has no class and is rejected.
    """
    if status == DOES_NOT_EXIST:
        raise ValueError("DOES_NOT_EXIST is not a provider status")
    if status in SUCCESS_STATES:
        return StatusClass.SUCCESS
    if status in FAILURE_STATES:
        return StatusClass.FAILURE
    if status not in WAITING_STATES:
        logger.warning("Unknown stack status %r, treating as in progress", status)
    return StatusClass.WAITING


def is_terminal(status: str) -> bool:
    if status == DOES_NOT_EXIST:
        return False
    return classify(status) is not StatusClass.WAITING


def deploy_succeeded(status: str) -> bool:
    return status not in FAILURE_STATES
