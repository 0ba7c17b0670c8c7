import pytest

from itinerary.errors import DecodeBoundsError, PolylineDecodeError
from itinerary.polyline import Coordinate, decode_polyline, encode_polyline

REFERENCE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


def test_reference_vector_decodes_to_known_points():
    points = decode_polyline(REFERENCE)

    assert [p.as_tuple() for p in points] == [
        pytest.approx((38.5, -120.2)),
        pytest.approx((40.7, -120.95)),
        pytest.approx((43.252, -126.453)),
    ]


def test_decoding_is_deterministic():
    assert decode_polyline(REFERENCE) == decode_polyline(REFERENCE)


def test_empty_string_decodes_to_no_points():
    assert decode_polyline("") == []


def test_single_point_at_origin():
    assert decode_polyline("??") == [Coordinate(0.0, 0.0)]


def test_unterminated_value_raises_bounds_error():
    # "_" carries the continuation flag, so the value never terminates.
    with pytest.raises(DecodeBoundsError) as excinfo:
        decode_polyline("_p~iF~ps|U_")

    assert excinfo.value.length == len("_p~iF~ps|U_")


def test_latitude_without_longitude_raises_bounds_error():
    with pytest.raises(DecodeBoundsError):
        decode_polyline("_p~iF")


def test_bounds_error_is_a_decode_error():
    with pytest.raises(PolylineDecodeError):
        decode_polyline("_")


def test_characters_outside_alphabet_are_rejected():
    with pytest.raises(PolylineDecodeError):
        decode_polyline("_p~iF ps|U")


def test_encode_matches_reference_vector():
    encoded = encode_polyline([(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)])

    assert encoded == REFERENCE


def test_encode_accepts_coordinates():
    points = [Coordinate(19.07598, 72.87766), Coordinate(19.0176, 72.8562)]

    assert decode_polyline(encode_polyline(points)) == points
