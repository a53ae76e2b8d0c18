"""Tests for wall layout: wall runs, continuous and panelized framing."""

import math

import pytest

from shedframe.core.analyzer import WallAnalyzer
from shedframe.core.dimensions import resolve_dimensions
from shedframe.models import (
    Axis, BuildingConfiguration, BuildingContext, DoorLayout, MemberType,
    PlacedOpening, Point2D, Point3D, WallRun, WallSide, overlaps,
)
from shedframe.models.framing import PLATE_TYPES, STUD_TYPES
from shedframe.rules.wall import continuous, panelized
from shedframe.rules.roof.layout import bearing_height
from shedframe.rules.wall.panelized import midpoint_seams, plan_panels
from shedframe.services.frame_service import FrameService


def front_wall(length=3000, thickness=100, height=2400):
    return WallRun(
        id=WallSide.FRONT, axis=Axis.X, length_mm=length,
        origin=Point3D(x=0, y=0, z=0), thickness_mm=thickness, height_mm=height,
    )


def placed(id, x, width=900, height=2000, wall=WallSide.FRONT):
    return PlacedOpening(id=id, wall=wall, x_mm=x, width_mm=width, height_mm=height, desired_x_mm=x)


def layout(length, *doors):
    return DoorLayout(wall=WallSide.FRONT, wall_length_mm=length, accepted=list(doors))


def stud_starts(members):
    return sorted(int(m.position.x) for m in members if m.type in STUD_TYPES)


def analyzed(**config):
    cfg = BuildingConfiguration.model_validate(config)
    context = BuildingContext(config=cfg, dims=resolve_dimensions(cfg))
    WallAnalyzer().analyze(context)
    return context


class TestWallRuns:
    def test_default_runs(self):
        context = analyzed()
        runs = {w.id: w for w in context.walls}
        assert runs[WallSide.FRONT].length_mm == 3050
        assert runs[WallSide.BACK].length_mm == 3050
        assert runs[WallSide.LEFT].length_mm == 3850
        assert runs[WallSide.RIGHT].length_mm == 3850
        assert runs[WallSide.BACK].origin.z == 3950
        assert runs[WallSide.RIGHT].origin.x == 2950

    def test_corners_meet_without_overlap(self):
        context = analyzed()
        boxes = {}
        for wall in context.walls:
            p, s = wall.box(0, 0, wall.length_mm, 50)
            boxes[wall.id] = (p.x, p.x + s.x, p.z, p.z + s.z)
        front, back = boxes[WallSide.FRONT], boxes[WallSide.BACK]
        left, right = boxes[WallSide.LEFT], boxes[WallSide.RIGHT]
        assert left[2] == front[3]
        assert left[3] == back[2]
        assert right[1] == front[1]
        for a, b in [(front, left), (front, right), (back, left), (back, right)]:
            assert not (overlaps(a[0], a[1], b[0], b[1]) and overlaps(a[2], a[3], b[2], b[3]))

    def test_panelized_thickness(self):
        context = analyzed(walls={"variant": "basic"})
        assert context.walls[0].thickness_mm == 75
        assert context.walls[2].length_mm == 4050 - 150

    def test_doors_snapped_per_wall(self):
        context = analyzed(walls={"openings": [
            {"id": "d1", "wall": "front", "x_mm": 0},
            {"id": "d2", "wall": "left", "x_mm": 500, "enabled": False},
            {"id": "d3", "wall": "back", "x_mm": 100, "width_mm": 5000},
        ]})
        assert [o.x_mm for o in context.doors_on(WallSide.FRONT).accepted] == [50]
        assert context.doors_on(WallSide.LEFT).accepted == []
        assert context.doors_on(WallSide.BACK).removed == ["d3"]


class TestContinuousWall:
    def test_plates_and_studs_without_doors(self):
        members = continuous.frame_wall(front_wall(), layout(3000), 50, 100, 400)
        plates = [m for m in members if m.type in PLATE_TYPES]
        assert len(plates) == 2
        assert all(m.size.x == 3000 for m in plates)
        top = next(m for m in plates if m.type is MemberType.TOP_PLATE)
        assert top.position.y == 2350
        assert stud_starts(members) == [0, 400, 800, 1200, 1600, 2000, 2400, 2800, 2950]

    def test_stud_length_between_plates(self):
        members = continuous.frame_wall(front_wall(), layout(3000), 50, 100, 400)
        studs = [m for m in members if m.type is MemberType.STUD]
        assert all(m.size.y == 2300 and m.position.y == 50 for m in studs)
        assert all(m.size.z == 100 for m in studs)

    def test_door_framing(self):
        members = continuous.frame_wall(front_wall(), layout(3000, placed("d1", 1000)), 50, 100, 400)
        assert stud_starts(members) == [0, 400, 800, 900, 950, 1900, 1950, 2000, 2400, 2800, 2950]

        trimmers = [m for m in members if m.type is MemberType.TRIMMER_STUD]
        kings = [m for m in members if m.type is MemberType.KING_STUD]
        assert sorted(m.position.x for m in trimmers) == [950, 1900]
        assert sorted(m.position.x for m in kings) == [900, 1950]
        assert all(m.size.y == 2000 for m in trimmers)
        assert all(m.opening_id == "d1" for m in trimmers + kings)

        (header,) = [m for m in members if m.type is MemberType.HEADER]
        assert header.position.x == 950
        assert header.size.x == 1000
        assert header.position.y == 2050
        assert header.position.y + header.size.y <= 2350

    def test_no_stud_inside_door(self):
        doors = layout(3000, placed("a", 200, width=700), placed("b", 1500, width=1000))
        members = continuous.frame_wall(front_wall(), doors, 50, 100, 400)
        for m in members:
            if m.type in STUD_TYPES:
                for o in doors.accepted:
                    assert not overlaps(m.position.x, m.position.x + 50, o.x_mm, o.end_mm)

    def test_tall_door_clamped_under_header(self):
        members = continuous.frame_wall(
            front_wall(), layout(3000, placed("d1", 1000, height=2390)), 50, 100, 400,
        )
        (header,) = [m for m in members if m.type is MemberType.HEADER]
        trimmer = next(m for m in members if m.type is MemberType.TRIMMER_STUD)
        assert trimmer.size.y == 2400 - 100 - 100
        assert header.position.y + header.size.y == 2350

    def test_door_near_corner_stays_inside_wall(self):
        members = continuous.frame_wall(front_wall(), layout(3000, placed("d1", 50)), 50, 100, 400)
        for m in members:
            assert m.position.x >= 0
            assert m.position.x + m.size.x <= 3000
        starts = stud_starts(members)
        assert len(starts) == len(set(starts))

    def test_close_doors_share_trimmer_without_header_overlap(self):
        doors = layout(3000, placed("a", 200, width=800), placed("b", 1050, width=800))
        members = continuous.frame_wall(front_wall(), doors, 50, 100, 400)
        headers = sorted(
            (m.position.x, m.position.x + m.size.x)
            for m in members if m.type is MemberType.HEADER
        )
        assert headers == [(150, 1025), (1025, 1900)]
        assert sum(b - a for a, b in headers) == 1750
        trimmers = sorted(m.position.x for m in members if m.type is MemberType.TRIMMER_STUD)
        assert trimmers == [150, 1000, 1850]

    def test_header_spans_untouched_when_apart(self):
        spans = continuous.header_spans([placed("b", 1500), placed("a", 200)], 50)
        assert spans == {"a": (150, 1150), "b": (1450, 2450)}

    def test_side_wall_runs_along_depth(self):
        wall = WallRun(
            id=WallSide.LEFT, axis=Axis.Z, length_mm=3850,
            origin=Point3D(x=0, y=0, z=100), thickness_mm=100, height_mm=2400,
        )
        doors = DoorLayout(wall=WallSide.LEFT, wall_length_mm=3850)
        members = continuous.frame_wall(wall, doors, 50, 100, 400)
        bottom = next(m for m in members if m.type is MemberType.BOTTOM_PLATE)
        assert (bottom.position.x, bottom.position.z) == (0, 100)
        assert (bottom.size.x, bottom.size.z) == (100, 3850)
        assert bottom.wall_id == "left"


class TestPanelPlan:
    def test_short_wall_single_panel(self):
        panels = plan_panels(2400, [], 2400, 50)
        assert [(p.start_mm, p.end_mm) for p in panels] == [(0, 2400)]

    def test_long_wall_split_at_midpoint(self):
        panels = plan_panels(5000, [], 2400, 50)
        assert [(p.start_mm, p.end_mm) for p in panels] == [(0, 2500), (2500, 5000)]

    def test_midpoint_seams(self):
        assert midpoint_seams(2400, 2400) == []
        assert midpoint_seams(2401, 2400) == [1200]

    def test_door_away_from_seam(self):
        panels = plan_panels(5000, [placed("d1", 500)], 2400, 50)
        assert [(p.start_mm, p.end_mm) for p in panels] == [(0, 2500), (2500, 5000)]
        assert all(p.door_ids == [] for p in panels)

    def test_door_on_seam_gets_own_panel(self):
        panels = plan_panels(5000, [placed("d1", 2200)], 2400, 50)
        assert [(p.start_mm, p.end_mm) for p in panels] == [(0, 2150), (2150, 3150), (3150, 5000)]
        assert panels[1].door_ids == ["d1"]

    def test_no_boundary_inside_any_door(self):
        doors = [placed("a", 2000, width=1200), placed("b", 3300, width=600)]
        panels = plan_panels(5000, doors, 2400, 50)
        for p in panels:
            for o in doors:
                assert not o.x_mm < p.start_mm < o.end_mm
                assert not o.x_mm < p.end_mm < o.end_mm
        assert panels[0].start_mm == 0
        assert panels[-1].end_mm == 5000


class TestPanelizedWall:
    def test_panel_plates_and_studs(self):
        members = panelized.frame_wall(front_wall(5000, 75), layout(5000), 50, 75, 2400)
        plates = [m for m in members if m.type is MemberType.BOTTOM_PLATE]
        assert sorted((m.position.x, m.size.x) for m in plates) == [(0, 2500), (2500, 2500)]
        assert stud_starts(members) == [0, 1225, 2450, 2500, 3725, 4950]

    def test_door_on_seam_framing(self):
        doors = layout(5000, placed("d1", 2200))
        members = panelized.frame_wall(front_wall(5000, 75), doors, 50, 75, 2400)
        uprights = [m for m in members if m.type is MemberType.UPRIGHT]
        assert sorted(m.position.x for m in uprights) == [2150, 3100]
        (header,) = [m for m in members if m.type is MemberType.HEADER]
        assert (header.position.x, header.size.x) == (2200, 900)
        assert stud_starts(members) == [0, 1050, 2100, 2150, 3100, 3150, 4050, 4950]
        door_plates = [m for m in members if m.tags.get("door_panel") == "d1"]
        assert len(door_plates) == 2
        assert all(m.size.x == 1000 for m in door_plates)

    @pytest.mark.parametrize("length", [1, 90, 2400, 4801, 9000])
    def test_plates_cover_wall(self, length):
        members = panelized.frame_wall(front_wall(length, 75), layout(length), 50, 75, 2400)
        plates = sorted(
            (m.position.x, m.position.x + m.size.x)
            for m in members if m.type is MemberType.BOTTOM_PLATE
        )
        assert plates[0][0] == 0
        assert plates[-1][1] == length
        for (_, a), (b, _) in zip(plates, plates[1:]):
            assert a == b


def plate_top_at(m, x):
    """Height of a top plate's upper face above plan position `x`."""
    return m.position.y + m.size.y / math.cos(m.slope) + math.tan(m.slope) * (x - m.position.x)


def single_slope(min_h=2400, max_h=3000):
    return {
        "dim": {"frame_w_mm": 4000, "frame_d_mm": 3000},
        "roof": {"style": "single_slope",
                 "single_slope": {"min_height_mm": min_h, "max_height_mm": max_h}},
    }


class TestWallHeightsFollowRoof:
    def test_runs_under_single_slope(self):
        runs = {w.id: w for w in analyzed(**single_slope()).walls}
        front = runs[WallSide.FRONT]
        assert front.height_mm == 2400
        assert front.slope == pytest.approx(math.atan2(600, 4000))
        assert front.top_at(4000) == pytest.approx(3000)
        assert runs[WallSide.BACK].slope == front.slope
        assert runs[WallSide.LEFT].height_mm == pytest.approx(2400)
        assert runs[WallSide.LEFT].slope == 0
        assert runs[WallSide.RIGHT].height_mm == pytest.approx(2400 + 600 * 3900 / 4000)

    def test_runs_under_gable_sit_at_eaves(self):
        context = analyzed(roof={"style": "gable", "gable": {"eaves_height_mm": 2100}})
        assert all(w.height_mm == 2100 and w.slope == 0 for w in context.walls)

    def test_top_plates_meet_roof_bearing(self):
        frame = FrameService().generate(single_slope())
        roof = frame.assembly("roof")
        plates = frame.members_of(MemberType.TOP_PLATE)
        assert len(plates) == 4
        for m in plates:
            x0 = m.position.x
            x1 = x0 + m.size.x * math.cos(m.slope)
            at = [bearing_height(roof, Point2D(x=x, z=m.position.z)) for x in (x0, x1)]
            if m.slope:
                assert plate_top_at(m, x0) == pytest.approx(at[0], abs=1e-3)
                assert plate_top_at(m, x1) == pytest.approx(at[1], abs=1e-3)
            else:
                assert plate_top_at(m, x0) == pytest.approx(min(at), abs=1e-3)
                assert plate_top_at(m, x1) <= max(at) + 1e-3

    def test_raking_studs_cut_under_plate(self):
        frame = FrameService().generate(single_slope())
        (top,) = [m for m in frame.members_of(MemberType.TOP_PLATE) if m.wall_id == "front"]
        studs = sorted(
            (m for m in frame.members if m.wall_id == "front" and m.type in STUD_TYPES),
            key=lambda m: m.position.x,
        )
        lengths = [m.size.y for m in studs]
        assert lengths == sorted(lengths)
        assert lengths[0] < lengths[-1]
        drop = top.size.y / math.cos(top.slope)
        for m in studs:
            underside = plate_top_at(top, m.position.x) - drop
            assert m.position.y + m.size.y == pytest.approx(underside, abs=1e-6)

    def test_header_fits_under_raking_plate(self):
        frame = FrameService().generate({**single_slope(), "walls": {"openings": [
            {"id": "d1", "wall": "front", "x_mm": 100, "height_mm": 2400},
        ]}})
        (top,) = [m for m in frame.members_of(MemberType.TOP_PLATE) if m.wall_id == "front"]
        (header,) = frame.members_of(MemberType.HEADER)
        drop = top.size.y / math.cos(top.slope)
        assert header.position.y + header.size.y <= plate_top_at(top, header.position.x) - drop

    def test_flat_roof_keeps_level_walls(self):
        frame = FrameService().generate()
        plates = frame.members_of(MemberType.TOP_PLATE)
        assert all(m.slope == 0 and m.position.y == 2350 for m in plates)
