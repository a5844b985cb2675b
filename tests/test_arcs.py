import math

import pytest

from pdfcanvas.arcs import (
    SVGArcParams,
    arc,
    arc2,
    basic_arc,
    center,
    circle,
    ellipse,
    kappa,
    svg_arc,
    vector_angle,
)
from pdfcanvas.content import ContentStream
from pdfcanvas.geometry import Matrix, Point


def _curve_ends(cs):
    ends = []
    for line in bytes(cs.data).split(b"\n"):
        parts = line.split()
        if parts and parts[-1] == b"c":
            ends.append((float(parts[-3]), float(parts[-2])))
    return ends


def _count(cs, op):
    return sum(1 for line in bytes(cs.data).split(b"\n") if line.split()[-1:] == [op])


def test_kappa_hardcoded_values():
    assert kappa(math.pi / 2) == 0.5522847498307933
    assert kappa(math.pi / 4) == 0.265216489839544
    assert kappa(math.pi / 8) == 0.13132187114288565


def test_kappa_general_matches_hardcoded_neighbourhood():
    assert kappa(math.pi / 2 + 1e-12) == pytest.approx(kappa(math.pi / 2), rel=1e-9)
    assert kappa(0.1) < kappa(0.2) < kappa(1.0)


def test_basic_arc_quarter_circle():
    p1, q1, q2, p2 = basic_arc(0.0, math.pi / 2)
    k = kappa(math.pi / 2)
    assert p1 == Point(1.0, 0.0)
    assert q1 == Point(1.0, k)
    assert (q2.x, q2.y) == pytest.approx((k, 1.0))
    assert (p2.x, p2.y) == pytest.approx((0.0, 1.0), abs=1e-12)


@pytest.mark.parametrize("theta,delta", [(0.3, 1.0), (2.0, -0.7), (-1.0, math.pi)])
def test_basic_arc_endpoints_on_unit_circle(theta, delta):
    p1, _, _, p2 = basic_arc(theta, delta)
    assert (p1.x, p1.y) == pytest.approx((math.cos(theta), math.sin(theta)))
    assert (p2.x, p2.y) == pytest.approx(
        (math.cos(theta + delta), math.sin(theta + delta))
    )


def test_circle_starts_with_move_and_ends_at_start():
    cs = ContentStream()
    circle(cs, 10, 20, 5)
    assert bytes(cs.data).startswith(b"15 20 m\n")
    assert (cs.gs.cur_pt.x, cs.gs.cur_pt.y) == pytest.approx((15, 20))
    ends = _curve_ends(cs)
    assert len(ends) >= 8
    for x, y in ends:
        assert math.hypot(x - 10, y - 20) == pytest.approx(5, abs=1e-9)


def test_ellipse_endpoints_on_ellipse():
    cs = ContentStream()
    ellipse(cs, 0, 0, 4, 2)
    for x, y in _curve_ends(cs):
        assert (x / 4) ** 2 + (y / 2) ** 2 == pytest.approx(1, abs=1e-9)


def test_arc_quarter_is_single_segment():
    cs = ContentStream()
    arc(cs, 0, 0, 1, 1, 0, math.pi / 2)
    assert _count(cs, b"c") == 1
    assert _count(cs, b"m") == 1
    assert (cs.gs.cur_pt.x, cs.gs.cur_pt.y) == pytest.approx((0, 1), abs=1e-12)


def test_arc_half_is_two_segments():
    cs = ContentStream()
    arc(cs, 0, 0, 1, 1, 0, math.pi)
    assert _count(cs, b"c") == 2
    assert (cs.gs.cur_pt.x, cs.gs.cur_pt.y) == pytest.approx((-1, 0), abs=1e-12)


def test_arc_clockwise():
    cs = ContentStream()
    arc(cs, 0, 0, 1, 1, 0, -math.pi / 2)
    assert (cs.gs.cur_pt.x, cs.gs.cur_pt.y) == pytest.approx((0, -1), abs=1e-12)


def test_arc_skips_move_when_already_at_start():
    cs = ContentStream()
    cs.move_to(1, 0)
    arc(cs, 0, 0, 1, 1, 0, math.pi / 2)
    assert _count(cs, b"m") == 1
    assert _count(cs, b"c") == 1


def test_arc_zero_delta_draws_nothing():
    cs = ContentStream()
    arc(cs, 0, 0, 1, 1, 0, 0)
    assert bytes(cs.data) == b""


def test_arc2_rotation():
    cs = ContentStream()
    arc2(cs, 0, 0, 2, 1, 0, math.pi / 2, math.pi / 2, math.pi / 2)
    first = bytes(cs.data).split(b"\n")[0].split()
    assert first[-1] == b"m"
    assert (float(first[0]), float(first[1])) == pytest.approx((0, 2), abs=1e-12)
    assert (cs.gs.cur_pt.x, cs.gs.cur_pt.y) == pytest.approx((-1, 0), abs=1e-12)


def test_arc2_zero_step_uses_eighth_pi():
    cs = ContentStream()
    arc2(cs, 0, 0, 1, 1, 0, math.pi / 4, 0, 0)
    assert _count(cs, b"c") == 2

    wide = ContentStream()
    arc2(wide, 0, 0, 1, 1, 0, math.pi / 4, 0, math.pi / 2)
    assert _count(wide, b"c") == 1


def test_vector_angle():
    assert vector_angle((1, 0), (0, 1)) == pytest.approx(math.pi / 2)
    assert vector_angle((0, 1), (1, 0)) == pytest.approx(-math.pi / 2)
    assert vector_angle((2, 0), (5, 0)) == pytest.approx(0)


def test_center_semicircle():
    cp = center(SVGArcParams(x1=0, y1=0, rx=1, ry=1, x2=2, y2=0))
    assert (cp.cx, cp.cy) == pytest.approx((1, 0), abs=1e-12)
    assert cp.rx == 1 and cp.ry == 1
    assert cp.theta == pytest.approx(math.pi)
    assert cp.delta == pytest.approx(-math.pi)


def test_center_scales_small_radii():
    cp = center(SVGArcParams(x1=0, y1=0, rx=0.5, ry=0.5, x2=2, y2=0))
    assert cp.rx == pytest.approx(1)
    assert cp.ry == pytest.approx(1)


@pytest.mark.parametrize("is_long", [False, True])
@pytest.mark.parametrize("is_clockwise", [False, True])
def test_center_quarter_arc_invariants(is_long, is_clockwise):
    s = SVGArcParams(
        x1=0, y1=0, rx=1, ry=1, x2=1, y2=1, is_long=is_long, is_clockwise=is_clockwise
    )
    cp = center(s)
    assert math.hypot(cp.cx - 0, cp.cy - 0) == pytest.approx(1)
    assert math.hypot(cp.cx - 1, cp.cy - 1) == pytest.approx(1)
    expected = 3 * math.pi / 2 if is_long else math.pi / 2
    assert abs(cp.delta) == pytest.approx(expected)
    assert (cp.delta > 0) == is_clockwise


def test_svg_arc_flips_y_axis():
    cs = ContentStream()
    s = SVGArcParams(x1=0, y1=50, rx=10, ry=10, x2=20, y2=50, is_clockwise=True)
    svg_arc(cs, s, 100, Matrix())
    first = bytes(cs.data).split(b"\n")[0].split()
    assert first[-1] == b"m"
    assert (float(first[0]), float(first[1])) == pytest.approx((0, 50), abs=1e-9)
    assert (cs.gs.cur_pt.x, cs.gs.cur_pt.y) == pytest.approx((20, 50), abs=1e-9)
    for x, y in _curve_ends(cs):
        assert math.hypot(x - 10, y - 50) == pytest.approx(10, abs=1e-9)


def test_svg_arc_coincident_endpoints_draws_nothing():
    cs = ContentStream()
    svg_arc(cs, SVGArcParams(x1=5, y1=5, rx=1, ry=1, x2=5, y2=5), 100, Matrix())
    assert bytes(cs.data) == b""