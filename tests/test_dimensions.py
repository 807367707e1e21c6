from Aha.dimensions import DimensionClassifier


def test_falls_back_to_thought():
    classifier = DimensionClassifier()
    assert classifier.classify("") == ["thought"]
    assert classifier.classify(None) == ["thought"]
    assert classifier.classify("jobb jobb jobb") == ["thought"]


def test_multiple_categories_in_fixed_order():
    classifier = DimensionClassifier()
    assert classifier.classify("Trist med klump i magen") == ["emotion", "body"]


def test_each_category_matches_by_substring():
    classifier = DimensionClassifier()
    assert classifier.classify("jeg er stressa") == ["emotion"]
    assert classifier.classify("jeg scroller hele natta") == ["behavior"]
    assert classifier.classify("jeg overtenker alt") == ["thought"]
    assert classifier.classify("jeg får hodepine") == ["body", "relation"]  # "hodepine" contains "de"
    assert classifier.classify("sjefen maser") == ["relation"]


def test_custom_keywords():
    classifier = DimensionClassifier(keywords={"work": ("jobb",)}, default="misc")
    assert classifier.classify("på jobb") == ["work"]
    assert classifier.classify("hjemme") == ["misc"]
