from numbers_engine.utils.grouping import group_blocks, group_digits, group_indian


def test_block_grouping_basic_groups():
    cases = [
        ("0", "0"),
        ("12", "12"),
        ("123", "123"),
        ("1234", "1,234"),
        ("123456", "123,456"),
        ("1234567", "1,234,567"),
    ]
    for digits, expected in cases:
        assert group_blocks(digits, ",", 3) == expected


def test_indian_grouping_basic_groups():
    cases = [
        ("0", "0"),
        ("123", "123"),
        ("1234", "1,234"),
        ("12345", "12,345"),
        ("123456", "1,23,456"),
        ("1234567", "12,34,567"),
        ("12345678", "1,23,45,678"),
        ("123456789", "12,34,56,789"),
    ]
    for digits, expected in cases:
        assert group_indian(digits, ",") == expected


def test_group_digits_dispatch():
    assert group_digits("123456789", " ", 3) == "123 456 789"
    assert group_digits("123456789", ".", 4) == "1.2345.6789"
    assert group_digits("123456789", ",", "2s") == "12,34,56,789"
    assert group_digits("123456789", ",", 1) == "1,2,3,4,5,6,7,8,9"


def test_empty_separator_or_digits():
    assert group_digits("1234567", "", 3) == "1234567"
    assert group_digits("", ",", 3) == ""


def test_narrow_no_break_space_separator():
    assert group_digits("1234567", " ", 3) == "1 234 567"
