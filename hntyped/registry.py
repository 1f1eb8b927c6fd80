"""Schemas for Hacker News items.

Each variant is a flat field table composed once at import from its own
fields plus the shared fragments. Fields listed first win on overlap.
"""
from .schemas import ArrayOf, LiteralTag, ObjectWithFields, Primitive, TaggedUnion, merge, optional

ID = Primitive("integer", minimum=0)
INTEGER = Primitive("integer")
COUNT = Primitive("integer", minimum=0)
STRING = Primitive("string")
NON_EMPTY_STRING = Primitive("string", min_length=1)
BOOLEAN = Primitive("boolean")

ID_LIST = ArrayOf(ID)

# fields shared by every item type except poll options
ITEM_COMMON = ObjectWithFields({
    "by": NON_EMPTY_STRING,  # username
    "id": ID,
    "time": COUNT,  # Unix seconds
    "dead": optional(BOOLEAN),
    "deleted": optional(BOOLEAN),
    "kids": optional(ID_LIST),  # comment IDs
})

# fields shared by stories, jobs and polls
TOP_LEVEL = ObjectWithFields({
    "score": INTEGER,
    "title": NON_EMPTY_STRING,
})

STORY = merge(
    ObjectWithFields({
        "type": LiteralTag("story"),
        "descendants": COUNT,  # comment count
        "text": optional(STRING),  # HTML, for text posts
        "url": optional(STRING),
    }),
    ITEM_COMMON,
    TOP_LEVEL,
)

JOB = merge(
    ObjectWithFields({
        "type": LiteralTag("job"),
        "text": optional(STRING),
        "url": optional(STRING),
    }),
    ITEM_COMMON,
    TOP_LEVEL,
)

POLL = merge(
    ObjectWithFields({
        "type": LiteralTag("poll"),
        "descendants": COUNT,
        "parts": ArrayOf(ID, min_items=1),  # poll option IDs
    }),
    ITEM_COMMON,
    TOP_LEVEL,
)

COMMENT = merge(
    ObjectWithFields({
        "type": LiteralTag("comment"),
        "parent": ID,  # story or comment replied to
        "text": STRING,
    }),
    ITEM_COMMON,
)

# Narrower than what the API returns: by/id/time are not required here.
POLLOPT = ObjectWithFields({
    "type": LiteralTag("pollopt"),
    "poll": ID,
    "score": INTEGER,
    "text": STRING,
})

ITEM = TaggedUnion("type", [COMMENT, JOB, POLL, POLLOPT, STORY])

SCHEMAS = {
    "id-list": ID_LIST,
    "item": ITEM,
    "story": STORY,
    "job": JOB,
    "poll": POLL,
    "pollopt": POLLOPT,
    "comment": COMMENT,
    "item-common": ITEM_COMMON,
    "top-level": TOP_LEVEL,
}
