from book_highlights.filters import matches_filter


def test_list_value_matches_any_element() -> None:
    front_matter = {"subtopic": ["Book Highlights", "Fiction"]}

    assert matches_filter(front_matter, "subtopic", "Book Highlights") is True


def test_json_encoded_list() -> None:
    assert matches_filter({"subtopic": '["Other"]'}, "subtopic", "Book Highlights") is False
    assert matches_filter({"subtopic": '["Book Highlights"]'}, "subtopic", "Book Highlights") is True


def test_missing_property_does_not_match() -> None:
    assert matches_filter({"title": "Dune"}, "subtopic", "Book Highlights") is False


def test_scalar_values_compare_trimmed() -> None:
    assert matches_filter({"type": "  book "}, "type", "book ") is True
    assert matches_filter({"type": "article"}, "type", "book") is False
    assert matches_filter({"rating": 5}, "rating", "5") is True
    assert matches_filter({"read": True}, "read", "true") is True
    assert matches_filter({"subtopic": "[not json"}, "subtopic", "[not json") is True


def test_filter_disabled_when_setting_empty() -> None:
    assert matches_filter({}, "", "Book Highlights") is True
    assert matches_filter({}, "subtopic", "") is True


def test_list_elements_are_stringified() -> None:
    assert matches_filter({"years": [1965, 1969]}, "years", "1969") is True


def test_integral_floats_compare_as_integers() -> None:
    assert matches_filter({"rating": 5.0}, "rating", "5") is True
    assert matches_filter({"rating": 4.5}, "rating", "4.5") is True
    assert matches_filter({"ratings": [3.0, 4.5]}, "ratings", "3") is True
