from lifesim.camera import Camera
from lifesim.constants import VIEWPORT_HEIGHT, VIEWPORT_WIDTH
from lifesim.renderer import Renderer


def test_camera_centres_origin():
    cam = Camera()
    sx, sy = cam.world_to_screen(0.0, 0.0)
    assert sx == VIEWPORT_WIDTH // 2
    assert cam.visible(sx, sy)
    assert not cam.visible(*cam.world_to_screen(500.0, 0.0))


def test_camera_move_is_clamped():
    cam = Camera()
    cam.move(1000.0, -1000.0)
    assert (cam.x, cam.z) == (cam.limit, -cam.limit)


def test_frame_has_top_bar_and_humans(empty_game):
    human = empty_game.spawn_human("Ana", (0.0, 0.0), age=20)
    renderer = Renderer()
    glyphs, colors = renderer.build_frame(empty_game)
    assert len(glyphs) == VIEWPORT_HEIGHT
    assert all(len(row) == VIEWPORT_WIDTH for row in glyphs)
    assert "Pop 1" in "".join(glyphs[0])
    assert "PAUSED" in "".join(glyphs[0])
    sx, sy = renderer.camera.world_to_screen(*human.position)
    assert glyphs[sy + 1][sx] == "@"


def test_render_draws_once_per_frame(game, monkeypatch):
    renderer = Renderer()
    drawn = []
    monkeypatch.setattr(renderer, "draw_grid", lambda g, c: drawn.append(len(g)))
    monkeypatch.setattr(renderer, "render_status", lambda text: None)
    lines = []
    monkeypatch.setattr(renderer, "render_overlay", lambda ls, y: lines.extend(ls))
    renderer.render(game)
    assert drawn == [VIEWPORT_HEIGHT]
    assert lines[0].startswith("Adán:")
    assert "[System] Continent generated." in lines
