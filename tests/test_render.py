from pathlib import Path

import pytest

from raylab.material import Light
from raylab.render import main, render
from raylab.scene import Scene
from raylab.shapes import Sphere
from raylab.vector import Vec3


def _sphere_scene(width=3, height=3):
    scene = Scene(width, height)
    scene.add_object(Sphere(Vec3(0, 0, -5), 1))
    scene.add_light(Light(Vec3(0, 0, 10), Vec3.splat(1)))
    return scene


def test_framebuffer_size_matches_scene():
    scene = Scene(5, 4)
    buffer = render(scene)
    assert len(buffer) == 20


def test_empty_scene_is_all_background():
    scene = Scene(4, 2)
    buffer = render(scene)
    assert all(pixel == scene.background_color for pixel in buffer)


def test_centre_pixel_hits_sphere_and_corner_misses():
    scene = _sphere_scene()
    buffer = render(scene, eye=Vec3())
    assert buffer[4] != scene.background_color
    assert buffer[4].x > 0
    assert buffer[0] == scene.background_color


def test_render_is_deterministic():
    first = render(_sphere_scene(), eye=Vec3())
    second = render(_sphere_scene(), eye=Vec3())
    assert first == second


def test_progress_reports_each_row_then_done():
    seen = []
    scene = Scene(2, 4)
    render(scene, progress=seen.append)
    assert len(seen) == 5
    assert seen[0] == 0.0
    assert seen[-1] == 1.0
    assert seen == sorted(seen)


def test_main_writes_images(tmp_path: Path, capsys):
    model = tmp_path / "tri.obj"
    model.write_text("v -1 0 -1\nv 1 0 -1\nv 0 1 -1\nf 1 2 3\n", encoding="utf-8")
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    code = main([str(model), "--width", "4", "--height", "3", "--output", str(out_dir)])
    assert code == 0
    ppm = (out_dir / "binary.ppm").read_bytes()
    assert ppm.startswith(b"P6\n4 3\n255\n")
    assert len(ppm) == len(b"P6\n4 3\n255\n") + 4 * 3 * 3
    png = (out_dir / "image.png").read_bytes()
    assert png.startswith(b"\x89PNG\r\n\x1a\n")
    assert "Render complete" in capsys.readouterr().out


def test_main_rejects_non_obj_path(tmp_path: Path):
    model = tmp_path / "model.txt"
    model.write_text("v 0 0 0\n", encoding="utf-8")
    with pytest.raises(ValueError):
        main([str(model), "--width", "2", "--height", "2", "--output", str(tmp_path)])


def test_main_rejects_bad_size(tmp_path: Path):
    assert main(["whatever.obj", "--width", "0", "--output", str(tmp_path)]) == 2