"""
Unit tests for the coordinate normalizer
"""
from historymap.schemas.point import NormalizedPoint
from historymap.services.points.normalize import normalize_children, normalize_points, validate_point


def test_scenario_drops_bad_latitude():
    raw = [
        {"objectId": "1", "name": "A", "lat": "-30.885", "lon": "-55.510"},
        {"objectId": "2", "name": "B", "lat": "bad", "lon": "-55.0"},
    ]
    points = normalize_points(raw)
    assert [p.object_id for p in points] == ["1"]
    assert points[0].lat == -30.885
    assert points[0].lon == -55.51


def test_keeps_order_and_each_valid_record_once(raw_points):
    points = normalize_points(raw_points)
    assert [p.object_id for p in points] == ["p1", "p2", "p4"]
    assert all(isinstance(p.lat, float) and isinstance(p.lon, float) for p in points)


def test_normalizing_twice_is_identity(raw_points):
    once = normalize_points(raw_points)
    twice = normalize_points(once)
    assert twice == once
    from_dumps = normalize_points([p.to_raw() for p in once])
    assert [p.to_raw() for p in from_dumps] == [p.to_raw() for p in once]


def test_other_fields_are_untouched():
    raw = {
        "objectId": "x",
        "name": "Casa de Cultura",
        "lat": "1.5",
        "lon": 2,
        "contact": "555-0100",
        "customField": {"era": "1900s"},
        "photoUrls": ["a.jpg", None, ""],
    }
    point = normalize_points([raw])[0]
    dumped = point.to_raw()
    assert dumped["contact"] == "555-0100"
    assert dumped["customField"] == {"era": "1900s"}
    assert dumped["photoUrls"] == ["a.jpg", None, ""]
    assert dumped["lat"] == 1.5 and dumped["lon"] == 2.0


def test_validation_returns_result_instead_of_raising():
    failed = validate_point({"objectId": "1", "name": "A", "lat": "inf", "lon": "1"})
    assert not failed.ok
    assert "lat" in failed.reason

    not_a_record = validate_point("oops")
    assert not not_a_record.ok

    missing_id = validate_point({"name": "A", "lat": 1, "lon": 1})
    assert not missing_id.ok


def test_bare_string_type_becomes_category():
    point = normalize_points([{"objectId": "1", "name": "A", "lat": 1, "lon": 1, "type": "Monumento"}])[0]
    assert point.category_id == "Monumento"
    assert point.category_name == "Monumento"


def test_already_normalized_points_pass_through():
    point = NormalizedPoint(object_id="1", name="A", lat=1.0, lon=2.0)
    assert validate_point(point).point is point


def test_empty_or_missing_collection():
    assert normalize_points([]) == []
    assert normalize_points(None) == []


def test_children_keep_optional_coordinates():
    children = normalize_children([
        {"objectId": "c1", "name": "Placa", "lat": "-30.1", "lon": "x", "type": {"id": "t", "name": "Placa"}},
        {"objectId": "c2", "name": "Busto"},
        {"name": "no id"},
        "garbage",
    ])
    assert [c.object_id for c in children] == ["c1", "c2"]
    assert children[0].lat == -30.1
    assert children[0].lon is None


def test_oversized_integer_coordinate_is_dropped():
    raw = [
        {"objectId": "1", "name": "A", "lat": 1, "lon": 2},
        {"objectId": "2", "name": "B", "lat": 10 ** 400, "lon": 1},
    ]
    assert not validate_point(raw[1]).ok
    assert [p.object_id for p in normalize_points(raw)] == ["1"]
