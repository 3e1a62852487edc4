import pytest
from phrasebook.result_log import ResultLog

@pytest.mark.e2e
def test_column_and_row_payloads():
    rows = ResultLog()
    rows.append("X")
    rows.append("Y")
    assert rows.serialize_column() == "X\nY"
    assert rows.serialize_row() == "X\tY"

@pytest.mark.e2e
def test_duplicates_and_order_are_kept():
    rows = ResultLog()
    for p in ["A", "B", "A"]:
        rows.append(p)
    assert rows.rows == ("A", "B", "A")

@pytest.mark.e2e
@pytest.mark.parametrize("idx", [0, -1, 3, 100])
def test_remove_at_on_empty_log_is_noop(idx):
    rows = ResultLog()
    assert rows.remove_at(idx) is False
    assert len(rows) == 0

@pytest.mark.e2e
def test_remove_at_and_clear():
    rows = ResultLog()
    for p in ["A", "B", "C"]:
        rows.append(p)
    assert rows.remove_at(1) is True
    assert rows.rows == ("A", "C")
    assert rows.remove_at(2) is False
    rows.clear()
    assert rows.serialize_column() == ""
