"""Strongly typed identifiers for portal entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PollId = NewType("PollId", UUID)
ProblemId = NewType("ProblemId", UUID)
EventId = NewType("EventId", UUID)
KitchenId = NewType("KitchenId", UUID)
MedicalCenterId = NewType("MedicalCenterId", UUID)

# Job listings are published with short external reference numbers
JobId = NewType("JobId", str)
