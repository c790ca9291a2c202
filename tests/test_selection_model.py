"""Tests for SelectionModel and ModifierState."""

from pagepicker.selection.selection_model import ModifierState, SelectionModel

SHIFT = ModifierState(shift=True)
PLAIN = ModifierState()


def _model_with(pages, anchor=None, known_pages=None):
    model = SelectionModel(known_pages=known_pages)
    for page in pages:
        model.toggle_page(page, PLAIN)
    if anchor is not None and model.anchor != anchor:
        # Toggle twice to move the anchor without changing the selection
        model.toggle_page(anchor, PLAIN)
        model.toggle_page(anchor, PLAIN)
    return model


class TestPlainToggle:
    def test_adds_unselected_page(self):
        model = SelectionModel()
        assert model.toggle_page(4, PLAIN) == {4}
        assert model.anchor == 4

    def test_removes_selected_page_and_moves_anchor(self):
        model = _model_with([2, 3, 4])
        assert model.toggle_page(3, PLAIN) == {2, 4}
        assert model.anchor == 3

    def test_shift_without_anchor_acts_as_plain_toggle(self):
        model = SelectionModel()
        assert model.toggle_page(5, SHIFT) == {5}
        assert model.anchor == 5

    def test_returns_copy(self):
        model = SelectionModel()
        result = model.toggle_page(1, PLAIN)
        result.add(99)
        assert model.selected_pages() == [1]


class TestShiftRange:
    def test_fills_range_from_anchor(self):
        model = _model_with([2], anchor=2)
        assert model.toggle_page(6, SHIFT) == {2, 3, 4, 5, 6}
        assert model.anchor == 2

    def test_range_below_anchor(self):
        model = _model_with([6], anchor=6)
        assert model.toggle_page(3, SHIFT) == {3, 4, 5, 6}

    def test_range_is_additive_only(self):
        model = _model_with([1, 3, 9], anchor=3)
        assert model.toggle_page(5, SHIFT) == {1, 3, 4, 5, 9}

    def test_range_never_deselects_clicked_page(self):
        model = _model_with([2, 4], anchor=2)
        model.toggle_page(4, SHIFT)
        assert model.is_selected(4)

    def test_second_shift_click_extends_from_original_anchor(self):
        # Deliberate and possibly surprising: the anchor stays on the last
        # plain click, so shift-clicking 8 then 4 keeps everything from 2 to 8.
        model = _model_with([2], anchor=2)
        model.toggle_page(8, SHIFT)
        assert model.anchor == 2
        assert model.toggle_page(4, SHIFT) == set(range(2, 9))

    def test_range_bounded_by_known_pages(self):
        model = SelectionModel(known_pages=5)
        model.set_from_text("9")
        assert model.anchor == 9
        assert model.toggle_page(3, SHIFT) == {3, 4, 5, 9}


class TestSelectAll:
    def test_replaces_previous_selection(self):
        model = _model_with([2, 9])
        assert model.select_all(5) == {1, 2, 3, 4, 5}

    def test_zero_pages(self):
        model = _model_with([1])
        assert model.select_all(0) == set()

    def test_ctrl_a_chord_on_key_press(self):
        model = SelectionModel(known_pages=4)
        assert model.press_key("ctrl") is False
        assert model.press_key("a") is True
        assert model.selected_pages() == [1, 2, 3, 4]

    def test_chord_in_either_order(self):
        model = SelectionModel(known_pages=3)
        model.press_key("a")
        assert model.press_key("ctrl") is True
        assert len(model) == 3

    def test_chord_deferred_until_pages_known(self):
        model = SelectionModel(known_pages=0)
        model.press_key("ctrl")
        assert model.press_key("a") is False
        assert len(model) == 0

    def test_click_with_chord_held_selects_all(self):
        model = SelectionModel(known_pages=6)
        assert model.toggle_page(2, ModifierState(ctrl=True, a=True)) == set(range(1, 7))

    def test_a_alone_does_nothing(self):
        model = SelectionModel(known_pages=6)
        assert model.press_key("a") is False
        assert len(model) == 0


class TestTextEntry:
    def test_set_from_text_replaces_selection(self):
        model = _model_with([1, 2])
        assert model.set_from_text("4,6-7") == {4, 6, 7}
        assert model.anchor == 7

    def test_empty_text_clears_anchor(self):
        model = _model_with([3])
        model.set_from_text("")
        assert model.anchor is None
        assert len(model) == 0

    def test_garbage_text_never_raises(self):
        model = SelectionModel()
        assert model.set_from_text("a,-,--,1-x") == set()

    def test_current_range_text(self):
        model = _model_with([5, 1, 3, 2, 7])
        assert model.current_range_text() == "1-3,5,7"

    def test_raw_text_kept_while_typing(self):
        model = SelectionModel()
        model.edit_text("1,2,")
        assert model.display_text == "1,2,"
        assert model.selected_pages() == [1, 2]
        assert model.commit_text() == "1-2"
        assert model.display_text == "1-2"

    def test_listeners_see_raw_text_while_typing(self):
        model = SelectionModel()
        seen = []
        model.add_listener(lambda pages: seen.append((pages, model.display_text)))

        model.edit_text("1,")
        model.edit_text("1,3")

        assert seen == [([1], "1,"), ([1, 3], "1,3")]

    def test_listeners_see_encoded_text_after_set_from_text(self):
        model = SelectionModel()
        model.edit_text("1,")
        seen = []
        model.add_listener(lambda pages: seen.append(model.display_text))

        model.set_from_text("1,2,3")

        assert seen == ["1-3"]

    def test_huge_typed_span_never_raises(self):
        model = SelectionModel(known_pages=5)
        assert model.edit_text("1-1000000000") == set()
        assert model.display_text == "1-1000000000"

    def test_typed_span_cut_at_page_count(self):
        model = SelectionModel(known_pages=0)
        model.reset(known_pages=0, total_pages=5)
        assert model.edit_text("2-1000000000") == {2, 3, 4, 5}

    def test_click_after_typing_shows_encoded_text(self):
        model = SelectionModel()
        model.edit_text("3,4")
        model.toggle_page(5, PLAIN)
        assert model.pending_text is None
        assert model.display_text == "3-5"


class TestModifiersAndListeners:
    def test_press_and_release(self):
        model = SelectionModel()
        model.press_key("Shift")
        assert model.modifiers.shift is True
        model.release_key("shift")
        assert model.modifiers.shift is False

    def test_untracked_key_ignored(self):
        model = SelectionModel()
        assert model.press_key("b") is False
        assert model.modifiers == ModifierState()

    def test_tracked_modifiers_used_by_default(self):
        model = _model_with([2], anchor=2)
        model.press_key("shift")
        assert model.toggle_page(4) == {2, 3, 4}

    def test_listener_receives_sorted_pages(self):
        model = SelectionModel()
        seen = []
        model.add_listener(seen.append)
        model.toggle_page(3, PLAIN)
        model.toggle_page(1, PLAIN)
        model.remove_listener(seen.append)
        model.toggle_page(2, PLAIN)
        assert seen == [[3], [1, 3]]

    def test_reset_for_new_document(self):
        model = _model_with([1, 2], known_pages=4)
        model.press_key("shift")
        model.reset(known_pages=0)
        assert len(model) == 0
        assert model.anchor is None
        assert model.known_pages == 0
        assert model.modifiers.shift is False
