"""Tests for nearest-scan selection."""

from datetime import time

import pytest

from nexrad_cloud.core.errors import InputError, NoCandidatesError, ScanIdentifierError
from nexrad_cloud.core.selection import scan_time, select_nearest_scan


IDENTIFIERS = [
    "KDMX20230406_115500_V06",
    "KDMX20230406_120500_V06",
    "KDMX20230406_110000_V06",
]


def test_scan_time():
    """Test time extraction from identifier."""
    assert scan_time("KDMX20230406_000312_V06") == time(0, 3, 12)


def test_select_returns_member_of_input():
    """Test selection never fabricates an identifier."""
    for target in (time(0, 0), time(11, 58), time(12, 5), time(23, 59, 59)):
        assert select_nearest_scan(IDENTIFIERS, target) in IDENTIFIERS


def test_select_uses_signed_difference():
    """Test that a later capture beats an earlier, closer one."""
    selected = select_nearest_scan(IDENTIFIERS, time(11, 56))

    assert selected == "KDMX20230406_120500_V06"


def test_select_single_candidate():
    """Test single candidate is always selected."""
    assert select_nearest_scan(["KDMX20230406_000312_V06"], time(18, 0)) == "KDMX20230406_000312_V06"


def test_select_tie_keeps_first():
    """Test first candidate wins on equal times."""
    ids = ["A_101010_x", "B_101010_y"]

    assert select_nearest_scan(ids, time(10, 0)) == "A_101010_x"


def test_select_empty_raises():
    """Test empty candidate list raises."""
    with pytest.raises(NoCandidatesError):
        select_nearest_scan([], time(12, 0))


@pytest.mark.parametrize("bad", ["KDMX20230406", "KDMX20230406_12xx00_V06", "KDMX_996060_V06"])
def test_select_malformed_identifier_raises(bad: str):
    """Test a malformed identifier anywhere in the list is fatal."""
    with pytest.raises(ScanIdentifierError):
        select_nearest_scan(IDENTIFIERS + [bad], time(12, 0))


def test_identifier_error_is_input_error():
    """Test error taxonomy."""
    assert issubclass(ScanIdentifierError, InputError)
    assert issubclass(NoCandidatesError, ValueError)
