from tablesorter.sortable_value import BankNumber, SortableValue


def test_integer_value():
    v = SortableValue(42)
    assert v.ordinal == 42
    assert str(v) == "42"


def test_numeric_text_keeps_original_display():
    v = SortableValue("007")
    assert v.ordinal == 7
    assert str(v) == "007"


def test_non_numeric_text_degrades():
    v = SortableValue("abc")
    assert v.ordinal == -1
    assert str(v) == ""


def test_unknown_kinds_degrade_like_text():
    for raw in (None, 3.5, [1], True):
        v = SortableValue(raw)
        assert v.ordinal == -1
        assert str(v) == ""


def test_sorted_ordinals_put_unparsable_first():
    values = [SortableValue(x) for x in ["7", "abc", 3, "10"]]
    assert [v.ordinal for v in sorted(values)] == [-1, 3, 7, 10]


def test_signed_text():
    assert SortableValue("-5").ordinal == -5
    assert SortableValue("+5").ordinal == 5
    assert SortableValue(" 5").ordinal == -1


def test_comparison_ignores_display():
    assert SortableValue("05") == SortableValue(5)
    assert SortableValue(1) < SortableValue("2")


def test_bank_number_from_msb_lsb():
    b = BankNumber.from_msb_lsb(1, 3)
    assert b.ordinal == 131
    assert str(b) == "1/3"
    assert BankNumber.from_msb_lsb(0, 127) < b


def test_bank_number_category_display():
    b = BankNumber(0)
    assert str(b) == ""


def test_text_outside_64_bit_range_degrades():
    assert SortableValue("9223372036854775807").ordinal == 9223372036854775807
    assert SortableValue("-9223372036854775808").ordinal == -9223372036854775808
    too_big = SortableValue("9223372036854775808")
    assert too_big.ordinal == -1
    assert str(too_big) == ""
    assert SortableValue("-9223372036854775809").ordinal == -1
