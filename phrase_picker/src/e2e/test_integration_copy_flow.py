import pytest
from phrasebook.engine import Engine
from phrasebook.models import ClipboardError

class FakeClipboard:
    def __init__(self, fail: str | None = None):
        self.fail = fail
        self.writes: list[str] = []

    def __call__(self, text: str) -> None:
        if self.fail:
            raise ClipboardError(self.fail)
        self.writes.append(text)

@pytest.fixture
def eng():
    e = Engine().open("memory://")
    yield e
    e.shutdown()

@pytest.mark.e2e
def test_successful_copy_appends_row(eng):
    clip = FakeClipboard()
    pick = eng.suggest("no.3")[0]
    res = eng.copy(pick, clip)
    assert res.ok and res.reason is None
    assert clip.writes == ["CARTON BOX NO.30"]
    assert eng.rows.rows == ("CARTON BOX NO.30",)

@pytest.mark.e2e
def test_failed_copy_leaves_log_untouched(eng):
    res = eng.copy("CARTON BOX NO.30", FakeClipboard(fail="permission denied"))
    assert not res.ok
    assert res.reason == "permission denied"
    assert len(eng.rows) == 0

@pytest.mark.e2e
def test_copy_rows_layouts_do_not_modify_log(eng):
    clip = FakeClipboard()
    eng.copy("X", clip)
    eng.copy("Y", clip)
    assert eng.copy_rows(clip, "column").payload == "X\nY"
    assert eng.copy_rows(clip, "row").payload == "X\tY"
    assert eng.rows.rows == ("X", "Y")
    with pytest.raises(ValueError):
        eng.copy_rows(clip, "diagonal")

@pytest.mark.e2e
def test_copy_custom_filtered(eng):
    eng.catalog.bulk_import("Tape brown\nTape clear\nGlue")
    clip = FakeClipboard()
    assert eng.copy_custom(clip, "tape").payload == "Tape brown\nTape clear"
    assert len(eng.rows) == 0

@pytest.mark.e2e
def test_clear_custom_requires_confirmation(eng):
    asked: list[str] = []
    assert eng.clear_custom(lambda msg: asked.append(msg) or True) == 0
    assert asked == []  # nothing custom, nothing asked

    eng.catalog.add("mine")
    assert eng.clear_custom(lambda msg: False) == 0
    assert eng.catalog.custom_subset() == ["mine"]
    assert eng.clear_custom(lambda msg: asked.append(msg) or True) == 1
    assert "1" in asked[0]
    assert eng.catalog.custom_subset() == []

@pytest.mark.e2e
def test_engine_requires_open():
    with pytest.raises(RuntimeError):
        Engine().suggest("x")
