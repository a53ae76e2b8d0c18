"""Tests for roof framing: spacing, sheet tiling, placement and both roof styles."""

import math

import pytest

from shedframe.core.bearing import height_at
from shedframe.models import AssemblyPlacement, Axis, MemberType, Point2D, Point3D
from shedframe.rules.roof.gable import gable_rise, gable_span_axis
from shedframe.rules.roof.layout import bearing_height, member_positions, place_unit, tile_ab, tile_plan
from shedframe.rules.roof.single_slope import sloped_length, span_axis_for
from shedframe.services.frame_service import FrameService


def single_slope(width=4000, depth=3000, min_h=2400, max_h=3000, **extra):
    return {
        "dim": {"frame_w_mm": width, "frame_d_mm": depth},
        "roof": {"style": "single_slope",
                 "single_slope": {"min_height_mm": min_h, "max_height_mm": max_h}},
        **extra,
    }


def gable(width=3050, depth=4050, **extra):
    return {"dim": {"frame_w_mm": width, "frame_d_mm": depth}, "roof": {"style": "gable"}, **extra}


class TestMemberPositions:
    def test_last_member_flush(self):
        assert member_positions(3050, 100) == [0, 600, 1200, 1800, 2400, 2950]

    def test_exact_multiple_not_duplicated(self):
        assert member_positions(1300, 100) == [0, 600, 1200]

    def test_run_shorter_than_member(self):
        assert member_positions(60, 100) == [0]

    def test_custom_spacing(self):
        assert member_positions(1000, 50, spacing=400) == [0, 400, 800, 950]

    def test_zero_spacing_terminates(self):
        assert member_positions(200, 50, spacing=0)[-1] == 150


class TestSheetTiling:
    def test_single_sheet(self):
        pieces = tile_ab(1220, 2440)
        assert len(pieces) == 1
        assert pieces[0].kind == "std"

    def test_piece_breakdown(self):
        pieces = tile_ab(3050, 4050)
        kinds = [(p.kind, p.a_len_mm, p.b_len_mm) for p in pieces]
        assert kinds.count(("std", 1220, 2440)) == 2
        assert ("rip", 610, 2440) in kinds
        assert kinds.count(("rip", 1220, 1610)) == 2
        assert ("rip", 610, 1610) in kinds
        assert len(pieces) == 6

    @pytest.mark.parametrize("a,b", [(1, 1), (1219, 2441), (2440, 4880), (3050, 4050), (5001, 7777)])
    def test_areas_sum_to_rectangle(self, a, b):
        assert sum(p.area for p in tile_ab(a, b)) == a * b

    def test_plan_puts_short_side_on_a(self):
        sheets = tile_plan(4045, 3000)
        assert sum(s.x_len_mm * s.z_len_mm for s in sheets) == 4045 * 3000
        std = [s for s in sheets if s.kind == "std"]
        assert all((s.x_len_mm, s.z_len_mm) == (2440, 1220) for s in std)


class TestSingleSlopeGeometry:
    def test_height_at(self):
        assert height_at(0, 4000, 2400, 3000) == 2400
        assert height_at(4000, 4000, 2400, 3000) == 3000
        assert height_at(2000, 4000, 2400, 3000) == 2700

    def test_bearing_plane_matches_height_at(self):
        roof = FrameService().generate(single_slope()).assembly("roof")
        assert bearing_height(roof, Point2D(x=2000, z=1500)) == pytest.approx(2700, abs=1e-3)
        for x in (0, 1000, 3900, 4000):
            expected = height_at(x, 4000, 2400, 3000)
            assert bearing_height(roof, Point2D(x=x, z=0)) == pytest.approx(expected, abs=1e-3)

    def test_sloped_length(self):
        assert sloped_length(4000, 4000, 2400, 3000) == 4045
        assert sloped_length(3050, 3050, 2400, 2400) == 3050

    def test_span_axis_follows_width(self):
        assert span_axis_for(3000, 4000) is Axis.X
        assert span_axis_for(5000, 3000) is Axis.X

    def test_members(self):
        frame = FrameService().generate(single_slope())
        rafters = frame.members_of(MemberType.RAFTER)
        assert len(rafters) == 6
        assert all(m.size.x == 4045 for m in rafters)
        assert sorted(m.position.z for m in rafters) == [0, 600, 1200, 1800, 2400, 2900]
        rims = frame.members_of(MemberType.RIM)
        assert sorted(m.position.x for m in rims) == [0, 3945]
        assert all(m.size.z == 3000 for m in rims)
        assert all(m.assembly == "roof" for m in rafters + rims)

    def test_sheathing_covers_roof(self):
        frame = FrameService().generate(single_slope())
        sheets = frame.members_of(MemberType.SHEATHING)
        assert len(sheets) == 6
        assert sum(m.size.x * m.size.z for m in sheets) == 4045 * 3000
        assert all(m.material == "osb" and m.position.y == 50 for m in sheets)

    def test_placement_edges(self):
        frame = FrameService().generate(single_slope())
        roof = frame.assembly("roof")
        assert roof.pitch == pytest.approx(math.atan2(600, 4000))
        assert roof.yaw == 0
        assert roof.low_edge_height_mm == pytest.approx(2400, abs=1e-3)
        assert roof.high_edge_height_mm == pytest.approx(3000, abs=1e-3)
        far = roof.to_world(Point3D(x=4045, y=0, z=0))
        assert far.x == pytest.approx(4000, abs=1)
        assert far.y == pytest.approx(3000, abs=1)

    def test_placement_with_overhang(self):
        frame = FrameService().generate(single_slope(overhang={"uniform_mm": 100}))
        roof = frame.assembly("roof")
        assert roof.origin.x == pytest.approx(-100)
        assert roof.origin.z == pytest.approx(-100)
        assert roof.low_edge_height_mm == pytest.approx(2400, abs=1e-3)
        assert roof.high_edge_height_mm == pytest.approx(3000, abs=1e-3)

    def test_flat_default(self):
        frame = FrameService().generate()
        roof = frame.assembly("roof")
        assert roof.pitch == 0
        assert roof.origin.y == pytest.approx(2400)
        assert roof.high_edge_height_mm == pytest.approx(2400)


class TestPlacement:
    def test_bearing_height_on_flat_unit(self):
        p = AssemblyPlacement(id="u", origin=Point3D(x=0, y=1000, z=0))
        assert bearing_height(p, Point2D(x=500, z=500)) == pytest.approx(1000)

    def test_yawed_unit_lands_on_corner(self):
        p = place_unit("u", Axis.Z, (3000, 5000), 0.0, Point2D(x=-20, z=-30),
                       Point2D(x=0, z=0), 2000, Point2D(x=0, z=3000))
        corners = [p.to_world(Point3D(x=x, y=0, z=z)) for x in (0, 3000) for z in (0, 5000)]
        assert min(c.x for c in corners) == pytest.approx(-20)
        assert min(c.z for c in corners) == pytest.approx(-30)
        assert max(c.x for c in corners) == pytest.approx(4980)
        assert max(c.z for c in corners) == pytest.approx(2970)
        assert all(c.y == pytest.approx(2000) for c in corners)


class TestGable:
    @pytest.mark.parametrize("span,rise", [(500, 200), (3000, 600), (3050, 610), (6000, 900)])
    def test_rise(self, span, rise):
        assert gable_rise(span) == rise

    def test_span_axis_is_shorter_side(self):
        assert gable_span_axis(3050, 4050) is Axis.X
        assert gable_span_axis(5000, 3000) is Axis.Z
        assert gable_span_axis(4000, 4000) is Axis.X

    def test_truss_set(self):
        frame = FrameService().generate(gable())
        chords = frame.members_of(MemberType.TRUSS_CHORD)
        assert len(chords) == 8
        assert all(m.size.x == 3050 for m in chords)
        assert len(frame.members_of(MemberType.TRUSS_RAFTER)) == 16
        assert len(frame.members_of(MemberType.TRUSS_WEB)) == 8
        assert len(frame.members_of(MemberType.RIDGE_BEAM)) == 1
        assert len(frame.members_of(MemberType.PURLIN)) == 2
        assert len(frame.members_of(MemberType.SHEATHING)) == 2
        assert frame.members_of(MemberType.RAFTER) == []

    def test_rafters_meet_at_ridge(self):
        frame = FrameService().generate(gable())
        left = next(m for m in frame.members_of(MemberType.TRUSS_RAFTER) if m.tags["side"] == "left")
        right = next(m for m in frame.members_of(MemberType.TRUSS_RAFTER) if m.tags["side"] == "right")
        assert left.size.x == round(math.hypot(1525, 610))
        assert left.slope == pytest.approx(math.atan2(610, 1525))
        assert right.slope == pytest.approx(-left.slope)
        assert (right.position.x, right.position.y) == (1525, 610)

    def test_purlins_at_quarter_points(self):
        frame = FrameService().generate(gable())
        purlins = sorted(frame.members_of(MemberType.PURLIN), key=lambda m: m.position.x)
        assert purlins[0].position.x + 25 == pytest.approx(3050 * 0.25)
        assert purlins[1].position.x + 25 == pytest.approx(3050 * 0.75)
        assert purlins[0].position.y == pytest.approx(purlins[1].position.y)

    def test_placement_along_width(self):
        frame = FrameService().generate(gable())
        roof = frame.assembly("roof")
        assert roof.yaw == 0
        assert roof.pitch == 0
        assert roof.origin.y == pytest.approx(2400)

    def test_eaves_height(self):
        frame = FrameService().generate(gable(roof={"style": "apex", "gable": {"eaves_height_mm": 2100}}))
        assert frame.assembly("roof").origin.y == pytest.approx(2100)

    def test_wide_plan_yaws_onto_depth(self):
        frame = FrameService().generate(gable(width=5000, depth=3000))
        roof = frame.assembly("roof")
        assert roof.yaw == pytest.approx(math.pi / 2)
        assert roof.span_axis is Axis.Z
        chord = frame.members_of(MemberType.TRUSS_CHORD)[0]
        assert chord.size.x == 3000
        corners = [roof.to_world(Point3D(x=x, y=0, z=z)) for x in (0, 3000) for z in (0, 5000)]
        assert min(c.x for c in corners) == pytest.approx(0, abs=1e-6)
        assert max(c.x for c in corners) == pytest.approx(5000)
        assert min(c.z for c in corners) == pytest.approx(0, abs=1e-6)
        assert max(c.z for c in corners) == pytest.approx(3000)
