import numpy as np
import PIL.Image
import pytest

import draw_julia
from juliaset import Bound, Complex, ConvergentColor, EscapeConfig, rasterize_sequential


def _parse(*args):
    parser = draw_julia.build_parser()
    opt = parser.parse_args(["--width", "4", "--height", "3", "--out-file", "out.png", *args])
    return parser, opt


def test_defaults():
    parser, opt = _parse()
    params = draw_julia.resolve_parameters(opt, parser)
    assert params.c == Complex(-0.15, 0.65)
    assert params.bound == Bound.square(2.0)
    assert params.escape == EscapeConfig()
    assert params.color.convergent is ConvergentColor.TRANSPARENT
    assert draw_julia.resolve_strategy(opt) == "sequential"


@pytest.mark.parametrize(
    "args,expected",
    [
        (["--multi-thread"], "parallel"),
        (["--multi-thread", "true"], "parallel"),
        (["--multi-thread", "false"], "sequential"),
        (["--multi-thread", "--strategy", "tensor"], "tensor"),
        (["--strategy", "sequential"], "sequential"),
    ],
)
def test_strategy_selection(args, expected):
    _, opt = _parse(*args)
    assert draw_julia.resolve_strategy(opt) == expected


def test_custom_plane_and_policy():
    parser, opt = _parse(
        "--c-re", "0.285", "--c-im", "0.01", "--north", "1", "--south", "-1",
        "--radius", "3", "--limit", "50", "--convergent", "opaque",
    )
    params = draw_julia.resolve_parameters(opt, parser)
    assert params.c == Complex(0.285, 0.01)
    assert params.bound == Bound(north=1.0, south=-1.0, west=-3.0, east=3.0)
    assert params.escape == EscapeConfig(radius=3.0, limit=50)
    assert params.color.convergent is ConvergentColor.OPAQUE


@pytest.mark.parametrize(
    "args",
    [
        ["--north", "-3"],
        ["--limit", "0"],
        ["--radius", "-1"],
        ["--multi-thread", "maybe"],
    ],
)
def test_invalid_arguments_exit(args):
    with pytest.raises(SystemExit) as excinfo:
        parser, opt = _parse(*args)
        draw_julia.resolve_parameters(opt, parser)
    assert excinfo.value.code == 2


def test_zero_sized_image_is_rejected(tmp_path):
    with pytest.raises(SystemExit):
        draw_julia.main(["--width", "0", "--height", "3", "--out-file", str(tmp_path / "x.png")])


def test_main_writes_png(tmp_path, capsys):
    out_file = tmp_path / "julia.png"
    status = draw_julia.main([
        "--width", "6", "--height", "4", "--out-file", str(out_file), "--limit", "64",
    ])
    assert status == 0
    assert str(out_file) in capsys.readouterr().out

    expected = rasterize_sequential(6, 4, Bound.square(2.0), Complex(-0.15, 0.65), escape=EscapeConfig(limit=64))
    with PIL.Image.open(out_file) as image:
        assert image.size == (6, 4)
        assert np.asarray(image).tobytes() == expected.tobytes()


def test_main_multi_thread_matches(tmp_path):
    sequential = tmp_path / "seq.png"
    parallel = tmp_path / "par.png"
    common = ["--width", "5", "--height", "5", "--limit", "64"]
    draw_julia.main([*common, "--out-file", str(sequential)])
    draw_julia.main([*common, "--out-file", str(parallel), "--multi-thread", "--executor", "thread", "--workers", "2"])

    with PIL.Image.open(sequential) as a, PIL.Image.open(parallel) as b:
        assert np.asarray(a).tobytes() == np.asarray(b).tobytes()
