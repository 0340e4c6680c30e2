from extraction.lexical import extract_contexts, extract_tags


def test_tags_are_extracted_and_stripped():
    tags, rest = extract_tags("Complete #documentation #review task")
    assert tags == ["documentation", "review"]
    assert rest == "Complete task"


def test_nested_tags_keep_slashes():
    tags, rest = extract_tags("Fix issue #project/mobile/ios/authentication")
    assert tags == ["project/mobile/ios/authentication"]
    assert rest == "Fix issue"


def test_contexts():
    contexts, rest = extract_contexts("Meeting with team @work @urgent")
    assert contexts == ["work", "urgent"]
    assert rest == "Meeting with team"


def test_bare_markers_are_ignored():
    tags, rest = extract_tags("Task # @")
    assert tags == []
    contexts, rest = extract_contexts(rest)
    assert contexts == []
    assert rest == "Task # @"
