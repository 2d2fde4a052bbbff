import PIL.Image
import pytest

import zoom

TINY = ["--x-res", "6", "--y-res", "4", "--max-iterations", "30", "--aa-factor", "1",
        "--max-square-size", "2", "--multiplier", "50"]


def test_parser_defaults():
    opt = zoom.build_parser().parse_args([])

    assert (opt.x_res, opt.y_res) == (800, 600)
    assert opt.aa_factor == 3
    assert opt.max_iterations == 50000
    assert opt.bailout == 10.0
    assert opt.zoom_factor == 0.95
    assert opt.mode == "frames"


def test_default_gradient_is_formed():
    gradient = zoom.build_gradient(zoom.build_parser().parse_args([]))

    assert gradient.is_formed()
    assert len(gradient) == 5


def test_magnification_overrides_plane_width():
    opt = zoom.build_parser().parse_args([*TINY, "--magnification", "8"])

    assert zoom.build_parameters(opt).plane_width == pytest.approx(0.5)


def test_image_mode_writes_last_frame(tmp_path):
    output = tmp_path / "out.png"

    assert zoom.main([*TINY, "--frames", "2", "--mode", "image", "--output", str(output)]) == 0

    with PIL.Image.open(output) as image:
        assert image.size == (6, 4)


def test_frames_resume_skips_existing(tmp_path, capsys):
    frame_dir = tmp_path / "frames"
    args = [*TINY, "--frames", "2", "--frame-dir", str(frame_dir)]

    zoom.main(args)
    assert sorted(p.name for p in frame_dir.iterdir()) == ["frame_0001.png", "frame_0002.png"]
    capsys.readouterr()

    zoom.main(args)
    out = capsys.readouterr().out
    assert "Skipping frame 1 (already exists)" in out
    assert "Skipping frame 2 (already exists)" in out


def test_gif_is_assembled_from_frames(tmp_path):
    gif = tmp_path / "movie.gif"

    zoom.main([*TINY, "--frames", "3", "--frame-dir", str(tmp_path / "frames"), "--gif", str(gif),
               "--colormap", "viridis"])

    assert gif.exists()
    with PIL.Image.open(gif) as image:
        assert image.format == "GIF"


@pytest.mark.parametrize("args", [
    ["--x-res", "1"],
    ["--aa-factor", "0"],
    ["--max-square-size", "5"],
    ["--bailout", "0.5"],
    ["--colormap", "no-such-colormap"],
    ["--mode", "image", "--gif", "movie.gif"],
    ["--output", "out.png"],
    ["--frames", "0"],
])
def test_bad_configuration_exits(tmp_path, args):
    with pytest.raises(SystemExit):
        zoom.main([*TINY, "--frame-dir", str(tmp_path), *args])
