import random
from itertools import combinations

import config
from events import Key, PointerButton, PointerMotion
from geometry import Rect, intersects
from model import Panel, place_new_panel

LEFT = config.BUTTON_LEFT


def _add(viewport, x, y, w=150, h=100) -> Panel:
    panel = Panel(rect=Rect(x, y, w, h))
    viewport.panels.append(panel)
    return panel


def test_second_panel_lands_below_first() -> None:
    first = Panel(rect=Rect(0, 0, 150, 100))
    new = place_new_panel(Panel.new(), [first])
    assert new.rect == Rect(0, 110, 150, 100)


def test_placement_stacks_down_a_column() -> None:
    existing = [Panel(rect=Rect(0, 0, 150, 100)), Panel(rect=Rect(0, 110, 150, 100))]
    new = place_new_panel(Panel.new(), existing)
    assert new.rect.y == 220


def test_placement_ignores_panels_off_to_the_side() -> None:
    new = place_new_panel(Panel.new(), [Panel(rect=Rect(200, 0, 150, 100))])
    assert (new.rect.x, new.rect.y) == (0, 0)


def test_placement_only_moves_down() -> None:
    new = place_new_panel(Panel.new(), [Panel(rect=Rect(100, 50, 150, 100))])
    assert (new.rect.x, new.rect.y) == (0, 160)


def test_placement_never_overlaps(viewport) -> None:
    for _ in range(12):
        viewport.add_panel()
    for a, b in combinations(viewport.panels, 2):
        assert not intersects(a.rect, b.rect)


def test_can_move_rejects_negative_coordinates(viewport) -> None:
    panel = _add(viewport, 0, 0)
    assert not panel.can_move(viewport, -5, 0)
    assert not panel.can_move(viewport, 0, -1)
    assert panel.can_move(viewport, 5, 0)


def test_can_move_rejects_touching_neighbour(viewport) -> None:
    top = _add(viewport, 0, 0)
    _add(viewport, 0, 110)
    assert top.can_move(viewport, 0, 5)
    assert not top.can_move(viewport, 0, 10)


def test_blocked_drag_leaves_panel_unchanged(viewport) -> None:
    top = _add(viewport, 0, 0)
    _add(viewport, 0, 110)
    top.grabbed = True
    top.on_pointer_motion(PointerMotion(20, 80, 0, 20), viewport)
    assert top.rect == Rect(0, 0, 150, 100)


def test_hover_shows_grab_handle(viewport) -> None:
    panel = _add(viewport, 0, 0)
    panel.on_pointer_motion(PointerMotion(20, 60), viewport)
    assert panel.hovered and panel.grab_handle_visible
    panel.on_pointer_motion(PointerMotion(500, 400), viewport)
    assert not panel.hovered and not panel.grab_handle_visible


def test_grab_handle_is_top_left_corner(viewport) -> None:
    panel = _add(viewport, 40, 30)
    assert panel.grab_handle == Rect(40, 30, 10, 10)
    assert panel.grab_handle_screen_rect(viewport) == (Rect(50, 85, 10, 10), True)


def test_grab_drag_release(viewport) -> None:
    panel = _add(viewport, 0, 0)
    panel.on_pointer_motion(PointerMotion(12, 57), viewport)

    assert panel.on_pointer_button(PointerButton(LEFT, True, 12, 57), viewport)
    assert panel.grabbed
    assert not panel.selection_visible

    panel.on_pointer_motion(PointerMotion(17, 57, 5, 0), viewport)
    assert panel.rect == Rect(5, 0, 150, 100)

    panel.on_pointer_button(PointerButton(LEFT, False, 300, 300), viewport)
    assert not panel.grabbed
    panel.on_pointer_motion(PointerMotion(22, 57, 5, 0), viewport)
    assert panel.rect == Rect(5, 0, 150, 100)


def test_handle_needs_hover_to_grab(viewport) -> None:
    panel = _add(viewport, 0, 0)
    assert not panel.on_pointer_button(PointerButton(LEFT, True, 12, 57), viewport)
    assert not panel.grabbed
    assert panel.selection_visible
    assert panel.active_cell == (0, 0)


def test_right_button_does_not_grab(viewport) -> None:
    panel = _add(viewport, 0, 0)
    panel.on_pointer_motion(PointerMotion(12, 57), viewport)
    assert not panel.on_pointer_button(PointerButton(config.BUTTON_RIGHT, True, 12, 57), viewport)
    assert not panel.grabbed


def test_click_selects_cell(viewport) -> None:
    panel = _add(viewport, 0, 0)
    panel.on_pointer_button(PointerButton(LEFT, True, 70, 95), viewport)
    assert panel.selection_visible
    assert panel.active_cell == (1, 1)

    panel.on_pointer_button(PointerButton(LEFT, True, 130, 125), viewport)
    assert panel.active_cell == (2, 2)


def test_click_on_far_edge_clamps(viewport) -> None:
    panel = _add(viewport, 0, 0)
    panel.on_pointer_button(PointerButton(LEFT, True, 160, 155), viewport)
    assert panel.active_cell == (2, 2)


def test_click_outside_hides_selection(viewport) -> None:
    panel = _add(viewport, 0, 0)
    panel.on_pointer_button(PointerButton(LEFT, True, 70, 95), viewport)
    panel.on_pointer_button(PointerButton(LEFT, True, 600, 400), viewport)
    assert not panel.selection_visible


def test_cell_hit_follows_scroll(viewport) -> None:
    panel = _add(viewport, 0, 0)
    viewport.vertical_scroll = -40
    # Screen y 55 + 40 - 40 = canvas y 40, the middle row.
    panel.on_pointer_button(PointerButton(LEFT, True, 15, 55), viewport)
    assert panel.active_cell == (1, 0)


def test_arrow_keys_clamp_without_wrapping(viewport) -> None:
    panel = _add(viewport, 0, 0)
    panel.on_pointer_button(PointerButton(LEFT, True, 70, 95), viewport)

    panel.on_key(Key(config.KEY_UP, True))
    assert panel.active_cell == (0, 1)
    panel.on_key(Key(config.KEY_UP, True))
    assert panel.active_cell == (0, 1)
    panel.on_key(Key(config.KEY_LEFT, True))
    panel.on_key(Key(config.KEY_LEFT, True))
    assert panel.active_cell == (0, 0)
    for _ in range(3):
        panel.on_key(Key(config.KEY_DOWN, True))
        panel.on_key(Key(config.KEY_RIGHT, True))
    assert panel.active_cell == (2, 2)


def test_arrow_keys_need_visible_selection(viewport) -> None:
    panel = _add(viewport, 0, 0)
    panel.on_key(Key(config.KEY_DOWN, True))
    assert panel.active_cell == (0, 0)


def test_key_release_is_ignored(viewport) -> None:
    panel = _add(viewport, 0, 0)
    panel.on_pointer_button(PointerButton(LEFT, True, 15, 60), viewport)
    panel.on_key(Key(config.KEY_DOWN, False))
    assert panel.active_cell == (0, 0)


def test_set_cell_stores_text() -> None:
    panel = Panel.new()
    panel.set_cell(1, 2, 42)
    assert panel.cells[1][2] == "42"
    panel.active_cell = (1, 2)
    assert panel.active_value() == "42"


def test_random_drags_keep_invariants(viewport) -> None:
    for _ in range(6):
        viewport.add_panel()
    rng = random.Random(7)
    for _ in range(300):
        panel = rng.choice(viewport.panels)
        panel.grabbed = True
        dx, dy = rng.randint(-40, 40), rng.randint(-40, 40)
        panel.on_pointer_motion(PointerMotion(0, 0, dx, dy), viewport)
        panel.grabbed = False
        assert panel.rect.x >= 0 and panel.rect.y >= 0
        for a, b in combinations(viewport.panels, 2):
            assert not intersects(a.rect, b.rect)


def test_render_draws_frame_grid_text_and_selection(viewport, renderer) -> None:
    panel = _add(viewport, 0, 0)
    panel.set_cell(0, 0, "abc")
    panel.selection_visible = True
    panel.active_cell = (1, 1)

    panel.render(renderer, viewport)

    assert renderer.of_kind("draw_rect")[0][1] == Rect(10, 55, 150, 100)
    assert renderer.of_kind("fill_rect")[0][1] == Rect(60, 88, 50, 33)
    lines = renderer.of_kind("draw_line")
    assert len(lines) == 6
    assert lines[1][1:3] == ((60, 55), (60, 154))
    assert lines[4][1:3] == ((10, 88), (159, 88))
    text = renderer.of_kind("draw_text")
    assert len(text) == 1
    assert text[0][1:4] == ("abc", (12, 65), Rect(12, 65, 18, 12))


def test_render_clips_text_to_cell(viewport, renderer) -> None:
    panel = _add(viewport, 0, 0)
    panel.set_cell(0, 0, "x" * 20)
    panel.render(renderer, viewport)
    _, _, origin, clip, _ = renderer.of_kind("draw_text")[0]
    assert origin == (12, 65)
    assert clip == Rect(12, 65, 48, 12)


def test_render_grab_handle_when_hovered(viewport, renderer) -> None:
    panel = _add(viewport, 0, 0)
    panel.grab_handle_visible = True
    panel.render(renderer, viewport)
    assert renderer.of_kind("fill_rect")[-1][1] == Rect(10, 55, 10, 10)


def test_render_partially_scrolled_panel(viewport, renderer) -> None:
    panel = _add(viewport, 0, 0)
    viewport.horizontal_scroll = -100
    panel.render(renderer, viewport)
    assert renderer.of_kind("draw_rect")[0][1] == Rect(10, 55, 50, 100)
    # Only the vertical line at canvas x 100 is still on screen.
    verticals = [call for call in renderer.of_kind("draw_line") if call[1][0] == call[2][0]]
    assert [call[1][0] for call in verticals] == [10]


def test_render_skips_panel_out_of_view(viewport, renderer) -> None:
    panel = _add(viewport, 0, 0)
    viewport.vertical_scroll = -500
    panel.render(renderer, viewport)
    assert renderer.calls == []
