import pytest

from hntyped.formatting import format_item, format_story, get_title


def test_story_line(samples):
    assert format_item(samples["story"]) == (
        '"My YC app: Dropbox - Throw away your USB drive" submitted by dhouston'
    )
    assert format_story(samples["story"]) == format_item(samples["story"])


def test_job_poll_and_option_lines(samples):
    assert format_item(samples["job"]) == "job posting: Justin.tv is looking for a Lead Flash Engineer!"
    assert format_item(samples["poll"]) == (
        'poll: "Poll: What would happen if News.YC had explicit support for polls?" - choose one of 3 options'
    )
    assert format_item(samples["pollopt"]).startswith("poll option: Yes, ban them")


def test_comment_excerpt(samples):
    comment = samples["comment"]
    assert format_item(comment) == f"norvig commented: {comment['text']}"
    comment["text"] = "x" * 61
    assert format_item(comment) == "norvig commented: " + "x" * 60 + "..."
    comment["text"] = "y" * 60
    assert format_item(comment) == "norvig commented: " + "y" * 60


def test_title_only_for_top_level_items(samples):
    assert get_title(samples["story"]).startswith("My YC app")
    assert get_title(samples["job"]).startswith("Justin.tv")
    assert get_title(samples["comment"]) is None
    assert get_title(samples["pollopt"]) is None


def test_unknown_type_raises():
    with pytest.raises(ValueError):
        format_item({"type": "ask"})
