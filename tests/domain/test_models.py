import pytest

from lexideck.domain.models import Item, LearningDirection, ProgressRecord, Rating


def test_item_prompt_and_answer_per_direction():
    item = Item(id="x", front="สวัสดี", back="Bonjour")

    assert item.prompt(LearningDirection.PRIMARY) == "สวัสดี"
    assert item.answer(LearningDirection.PRIMARY) == "Bonjour"
    assert item.prompt(LearningDirection.REVERSE) == "Bonjour"
    assert item.answer(LearningDirection.REVERSE) == "สวัสดี"


def test_item_is_immutable():
    item = Item(id="x", front="a", back="b")
    with pytest.raises(AttributeError):
        item.front = "c"


@pytest.mark.parametrize(
    "raw,expected",
    [("GOOD", Rating.GOOD), ("easy", Rating.EASY), (" hard ", Rating.HARD), ("AGAIN", Rating.FAIL)],
)
def test_rating_parsing(raw, expected):
    assert Rating(raw) == expected


def test_rating_rejects_unknown():
    with pytest.raises(ValueError):
        Rating("maybe")


def test_failure_ratings():
    assert [r for r in Rating if r.is_failure] == [Rating.FAIL, Rating.HARD]


def test_record_without_rating_omits_status():
    data = ProgressRecord("k", 10, 1, 0).to_dict()
    assert "lastStatus" not in data
    assert ProgressRecord.from_dict("k", data) == ProgressRecord("k", 10, 1, 0)


def test_record_from_dict_uses_mapping_key():
    # The mapping key is authoritative even if the stored cardId disagrees.
    record = ProgressRecord.from_dict("abc_rev", {"cardId": "abc", "nextReview": 1,
                                                 "interval": 1, "reps": 0})
    assert record.key == "abc_rev"


@pytest.mark.parametrize(
    "data",
    [
        {"nextReview": 1, "interval": 1},
        {"nextReview": True, "interval": 1, "reps": 0},
        {"nextReview": None, "interval": 1, "reps": 0},
        {"nextReview": float("inf"), "interval": 1, "reps": 0},
        {"nextReview": 1, "interval": 1, "reps": float("-inf")},
        "not a dict",
    ],
)
def test_record_from_dict_rejects_malformed(data):
    with pytest.raises(ValueError):
        ProgressRecord.from_dict("k", data)


def test_record_from_dict_accepts_large_integers():
    record = ProgressRecord.from_dict("k", {"nextReview": 10**400, "interval": 1, "reps": 0})
    assert record.next_review_at == 10**400
