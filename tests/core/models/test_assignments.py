"""Tests for the marker assignment table."""

from markercluster.core.models.geo import Marker
from markercluster.core.models.spatial import MarkerAssignments


def test_assign_and_release():
    assignments = MarkerAssignments()
    first, second = Marker.at(0.0, 0.0), Marker.at(1.0, 1.0)

    assignments.assign(first, 3)
    assert assignments.is_assigned(first)
    assert assignments.cluster_of(first) == 3
    assert assignments.cluster_of(second) is None
    assert assignments.get_unassigned([first, second]) == [second]
    assert len(assignments) == 1

    assignments.release(first)
    assignments.release(second)
    assert not assignments.is_assigned(first)
    assert len(assignments) == 0


def test_clear():
    assignments = MarkerAssignments()
    markers = [Marker.at(0.0, float(i)) for i in range(3)]
    for marker in markers:
        assignments.assign(marker, 0)
    assignments.clear()
    assert assignments.get_unassigned(markers) == markers


def test_copies_are_tracked_separately():
    assignments = MarkerAssignments()
    original = Marker.at(0.0, 0.0)
    copy = original.model_copy()
    assert copy.uid == original.uid

    assignments.assign(original, 1)
    assert assignments.is_assigned(original)
    assert not assignments.is_assigned(copy)
    unassigned = assignments.get_unassigned([original, copy])
    assert len(unassigned) == 1
    assert unassigned[0] is copy

    assignments.assign(copy, 2)
    assignments.release(original)
    assert assignments.cluster_of(copy) == 2
    assert assignments.cluster_of(original) is None
