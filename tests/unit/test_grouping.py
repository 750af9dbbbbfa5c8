from historymap.services.points.grouping import group_key, group_points
from historymap.services.points.normalize import normalize_points


def _points(*coords):
    return normalize_points([
        {"objectId": str(i), "name": f"P{i}", "lat": lat, "lon": lon}
        for i, (lat, lon) in enumerate(coords)
    ])


def test_nearly_identical_points_share_a_group():
    points = _points((-30.88500, -55.51000), (-30.885004, -55.510004))
    groups = group_points(points)
    assert len(groups) == 1
    assert groups[0].size == 2
    assert groups[0].is_cluster
    assert groups[0].key == "-30.88500|-55.51000"
    assert (groups[0].lat, groups[0].lon) == (-30.885, -55.51)


def test_groups_partition_the_collection_in_arrival_order():
    points = _points((1.0, 1.0), (2.0, 2.0), (1.000001, 1.0), (3.0, 3.0), (2.0, 2.000004))
    groups = group_points(points)
    assert [g.key for g in groups] == ["1.00000|1.00000", "2.00000|2.00000", "3.00000|3.00000"]
    assert [[p.object_id for p in g.members] for g in groups] == [["0", "2"], ["1", "4"], ["3"]]
    members = [p for g in groups for p in g.members]
    assert sorted(p.object_id for p in members) == sorted(p.object_id for p in points)
    assert not groups[2].is_cluster


def test_points_a_few_meters_apart_stay_separate():
    groups = group_points(_points((1.0, 1.0), (1.00002, 1.0)))
    assert len(groups) == 2


def test_negative_zero_matches_zero():
    assert group_key(-0.000001, 0.0) == group_key(0.000001, -0.0) == "0.00000|0.00000"


def test_precision_is_configurable():
    points = _points((1.001, 1.0), (1.004, 1.0))
    assert len(group_points(points, precision=2)) == 1
    assert len(group_points(points, precision=3)) == 2


def test_empty_input():
    assert group_points([]) == []
