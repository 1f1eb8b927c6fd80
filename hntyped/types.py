"""Static shapes of decoded items, matching the schemas in ``registry``."""
from typing import List, Literal, NotRequired, TypedDict, Union


class ItemCommon(TypedDict):
    by: str
    id: int
    time: int
    dead: NotRequired[bool]
    deleted: NotRequired[bool]
    kids: NotRequired[List[int]]


class TopLevel(ItemCommon):
    score: int
    title: str


class Story(TopLevel):
    type: Literal["story"]
    descendants: int
    text: NotRequired[str]
    url: NotRequired[str]


class Job(TopLevel):
    type: Literal["job"]
    text: NotRequired[str]
    url: NotRequired[str]


class Poll(TopLevel):
    type: Literal["poll"]
    descendants: int
    parts: List[int]


class Comment(ItemCommon):
    type: Literal["comment"]
    parent: int
    text: str


class PollOpt(TypedDict):
    type: Literal["pollopt"]
    poll: int
    score: int
    text: str


Item = Union[Story, Job, Poll, PollOpt, Comment]
