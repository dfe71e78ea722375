import threading

import pytest

from pdfmerger.services.selection_service import SelectionList


def _names(selection: SelectionList) -> list[str]:
    return [document.name for document in selection]


@pytest.fixture
def selection(make_pending) -> SelectionList:
    return SelectionList([make_pending("a", 1), make_pending("b", 2), make_pending("c", 3)])


@pytest.mark.unit
def test_add_appends_in_order(selection: SelectionList, make_pending) -> None:
    selection.add([make_pending("d", 1), make_pending("e", 1)])
    assert _names(selection) == ["a.pdf", "b.pdf", "c.pdf", "d.pdf", "e.pdf"]

    selection.add([])
    assert len(selection) == 5


@pytest.mark.unit
def test_add_allows_duplicates(selection: SelectionList) -> None:
    selection.add([selection[0]])
    assert _names(selection) == ["a.pdf", "b.pdf", "c.pdf", "a.pdf"]
    assert selection.total_pages() == 7


@pytest.mark.unit
def test_move_up_first_and_move_down_last_are_noops(selection: SelectionList) -> None:
    selection.move_up(0)
    selection.move_down(2)
    assert _names(selection) == ["a.pdf", "b.pdf", "c.pdf"]


@pytest.mark.unit
@pytest.mark.parametrize("index", [1, 2])
def test_move_up_then_down_restores_order(selection: SelectionList, index: int) -> None:
    original = _names(selection)
    selection.move_up(index)
    assert _names(selection) != original
    selection.move_down(index - 1)
    assert _names(selection) == original


@pytest.mark.unit
def test_moves_swap_adjacent(selection: SelectionList) -> None:
    selection.move_down(0)
    assert _names(selection) == ["b.pdf", "a.pdf", "c.pdf"]
    selection.move_up(2)
    assert _names(selection) == ["b.pdf", "c.pdf", "a.pdf"]


@pytest.mark.unit
@pytest.mark.parametrize("index", [-1, 3, 10])
def test_out_of_range_indices_are_ignored(selection: SelectionList, index: int) -> None:
    assert selection.remove_at(index) is None
    selection.move_up(index)
    selection.move_down(index)
    assert _names(selection) == ["a.pdf", "b.pdf", "c.pdf"]


@pytest.mark.unit
def test_remove_at_updates_total_pages(selection: SelectionList) -> None:
    assert selection.total_pages() == 6

    removed = selection.remove_at(1)

    assert removed is not None
    assert removed.name == "b.pdf"
    assert selection.total_pages() == 4
    assert _names(selection) == ["a.pdf", "c.pdf"]


@pytest.mark.unit
def test_clear_and_snapshot_is_independent(selection: SelectionList) -> None:
    snapshot = selection.snapshot()
    selection.clear()

    assert len(selection) == 0
    assert selection.total_pages() == 0
    assert [document.name for document in snapshot] == ["a.pdf", "b.pdf", "c.pdf"]


@pytest.mark.unit
def test_concurrent_adds_are_not_lost(make_pending) -> None:
    selection = SelectionList()
    documents = [make_pending(f"doc{index}", index % 3 + 1) for index in range(6)]
    rounds = 200

    def worker(document) -> None:
        for _ in range(rounds):
            selection.add([document])

    threads = [threading.Thread(target=worker, args=(document,)) for document in documents]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(selection) == len(documents) * rounds
    assert selection.total_pages() == rounds * sum(document.page_count for document in documents)
