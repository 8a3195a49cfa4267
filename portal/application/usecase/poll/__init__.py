"""Poll use cases."""

from .create_poll import CreatePollRequest, CreatePollUseCase
from .get_poll import GetPollRequest, GetPollUseCase, PollItem, PollOptionItem
from .list_polls import ListPollsRequest, ListPollsResponse, ListPollsUseCase

__all__ = [
    "CreatePollRequest",
    "CreatePollUseCase",
    "GetPollRequest",
    "GetPollUseCase",
    "ListPollsRequest",
    "ListPollsResponse",
    "ListPollsUseCase",
    "PollItem",
    "PollOptionItem",
]
