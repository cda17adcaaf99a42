"""Tests for the MarkerClusterer service."""

from collections import Counter

import numpy as np
import pytest

from markercluster.core.exceptions.services.clustering import InvalidOptionError
from markercluster.core.models.geo import LatLng, Marker
from markercluster.core.models.spatial import ClusterIcon, ClusterSummary
from markercluster.core.services.clustering import MarkerClusterer
from markercluster.core.services.surface import make_map
from markercluster.utils.constants import MapEvent


def assert_partition(clusterer, surface):
    """Every in-view marker belongs to exactly one live cluster."""
    viewport = clusterer.get_extended_bounds(surface.get_bounds())
    membership = Counter(id(m) for c in clusterer.clusters for m in c.markers)

    for marker in clusterer.markers:
        if viewport.contains(marker.position):
            assert membership[id(marker)] == 1
            owner = next(c for c in clusterer.clusters if c.is_already_member(marker))
            assert clusterer.assignments.cluster_of(marker) == owner.id
        else:
            assert membership[id(marker)] == 0
            assert not clusterer.is_assigned(marker)

    for cluster in clusterer.clusters:
        if cluster.size >= clusterer.min_cluster_size:
            assert cluster.icon.visible
            assert not any(m.on_map for m in cluster.markers)
        else:
            assert not cluster.icon.visible
            assert all(m.map is surface for m in cluster.markers)


def test_close_markers_form_one_cluster(surface, make_clusterer, close_markers):
    clusterer = make_clusterer(surface, close_markers)

    assert clusterer.ready
    assert clusterer.total_markers == 3
    assert clusterer.total_clusters == 1

    cluster = clusterer.clusters[0]
    assert cluster.size == 3
    assert cluster.icon.visible
    assert cluster.icon.summary == ClusterSummary(text="3", index=1)
    assert not any(m.on_map for m in close_markers)


def test_distant_markers_stay_separate(world_surface, make_clusterer):
    markers = [Marker.at(60.0, 60.0), Marker.at(-60.0, -60.0)]
    clusterer = make_clusterer(world_surface, markers)

    assert clusterer.total_clusters == 2
    assert [c.markers for c in clusterer.clusters] == [[markers[0]], [markers[1]]]
    assert all(m.map is world_surface for m in markers)
    assert not any(c.icon.visible for c in clusterer.clusters)


def test_partition_of_many_markers(make_clusterer):
    surface = make_map(0.0, 0.0, zoom=8)
    rng = np.random.default_rng(7)
    markers = [
        Marker.at(float(lat), float(lng))
        for lat, lng in rng.uniform(-1.0, 1.0, size=(200, 2))
    ]
    outside = [Marker.at(40.0, 100.0), Marker.at(-40.0, -100.0)]
    clusterer = make_clusterer(surface, markers + outside)

    assert clusterer.total_clusters > 1
    assert sum(c.size for c in clusterer.clusters) == len(markers)
    assert len(clusterer.assignments) == len(markers)
    assert not any(m.on_map for m in outside)
    assert_partition(clusterer, surface)


def test_clustering_waits_for_surface(close_markers):
    surface = make_map(0.0, 0.0, loaded=False)
    clusterer = MarkerClusterer(surface, close_markers)

    assert not clusterer.ready
    assert clusterer.total_clusters == 0
    assert not any(clusterer.is_assigned(m) for m in close_markers)

    surface.load()

    assert clusterer.ready
    assert clusterer.total_clusters == 1
    clusterer.close()


def test_redraw_only_places_new_markers(surface, make_clusterer, close_markers):
    clusterer = make_clusterer(surface, close_markers)
    cluster = clusterer.clusters[0]

    surface.idle()
    assert clusterer.clusters == [cluster]

    late = Marker.at(0.0, 0.0003)
    clusterer.add_marker(late)
    assert clusterer.clusters == [cluster]
    assert cluster.size == 4
    assert cluster.icon.text == "4"


def test_no_redraw_defers_placement(surface, make_clusterer, close_markers):
    clusterer = make_clusterer(surface)
    clusterer.add_markers(close_markers, no_redraw=True)

    assert clusterer.total_markers == 3
    assert clusterer.total_clusters == 0

    clusterer.redraw()
    assert clusterer.total_clusters == 1


def test_duplicate_add_is_ignored(surface, make_clusterer, close_markers):
    clusterer = make_clusterer(surface, close_markers)
    clusterer.add_marker(close_markers[0])

    assert clusterer.total_markers == 3
    assert clusterer.clusters[0].size == 3


def test_copy_sharing_uid_is_clustered(surface, make_clusterer):
    original = Marker.at(0.0, 0.0)
    moved = original.model_copy(update={"position": LatLng(0.0, 0.5)})
    assert moved.uid == original.uid

    clusterer = make_clusterer(surface, [original, moved])

    assert clusterer.total_markers == 2
    assert clusterer.total_clusters == 2
    assert clusterer.is_assigned(original)
    assert clusterer.is_assigned(moved)
    assert clusterer.assignments.cluster_of(original) != clusterer.assignments.cluster_of(moved)
    assert original.map is surface
    assert moved.map is surface
    assert_partition(clusterer, surface)

    assert clusterer.remove_marker(original)
    assert clusterer.total_markers == 1
    assert clusterer.markers[0] is moved
    assert clusterer.is_assigned(moved)


def test_bulk_add_tracks_membership(surface, make_clusterer):
    markers = [Marker.at(0.0, i * 0.0001) for i in range(5000)]
    clusterer = make_clusterer(surface)

    clusterer.add_markers(markers, no_redraw=True)
    clusterer.add_markers(markers[::2], no_redraw=True)
    assert clusterer.total_markers == 5000

    assert clusterer.remove_marker(markers[10], no_redraw=True)
    assert clusterer.total_markers == 4999
    clusterer.add_marker(markers[10], no_redraw=True)
    assert clusterer.total_markers == 5000
    assert clusterer.markers[-1] is markers[10]

    clusterer.clear_markers()
    clusterer.add_markers(markers[:3], no_redraw=True)
    assert clusterer.total_markers == 3


def test_zoom_change_rebuilds_clusters(surface, make_clusterer, close_markers):
    clusterer = make_clusterer(surface, close_markers)
    old_cluster = clusterer.clusters[0]

    surface.set_zoom(11)

    assert clusterer.previous_zoom == 11
    assert old_cluster.removed
    assert not surface.is_attached(old_cluster.icon)
    assert clusterer.total_clusters == 1
    new_cluster = clusterer.clusters[0]
    assert new_cluster is not old_cluster
    assert new_cluster.id > old_cluster.id
    assert new_cluster.size == 3
    assert_partition(clusterer, surface)


def test_pan_keeps_existing_clusters(surface, make_clusterer, close_markers):
    clusterer = make_clusterer(surface, close_markers)
    cluster = clusterer.clusters[0]

    surface.pan_to(LatLng(0.0, 0.01))

    assert clusterer.clusters == [cluster]
    assert not cluster.removed


def test_repaint_draws_new_clusters_before_removing_old(
    surface, make_clusterer, close_markers
):
    clusterer = make_clusterer(surface, close_markers)
    old_cluster = clusterer.clusters[0]

    clusterer.repaint()

    new_cluster = clusterer.clusters[0]
    assert new_cluster is not old_cluster
    # Both icons are on the surface until the host loop turns over
    assert surface.is_attached(old_cluster.icon)
    assert surface.is_attached(new_cluster.icon)
    assert surface.pending_tasks == 1

    surface.run_pending()

    assert old_cluster.removed
    assert not surface.is_attached(old_cluster.icon)
    log = surface.overlay_log
    attached_new = log.index(("attach", new_cluster.icon))
    detached_old = log.index(("detach", old_cluster.icon))
    assert attached_new < detached_old
    assert surface.overlays_of_type(ClusterIcon) == [new_cluster.icon]


def test_dragged_marker_is_reclustered(surface, make_clusterer):
    markers = [
        Marker.at(0.0, 0.0),
        Marker.at(0.0, 0.0001),
        Marker.at(0.0, 0.0002, draggable=True),
    ]
    clusterer = make_clusterer(surface, markers)
    assert clusterer.total_clusters == 1

    markers[2].set_position(LatLng(0.0, 0.5))
    surface.trigger(markers[2], MapEvent.DRAG_END)
    surface.run_pending()

    assert clusterer.total_clusters == 2
    assert [c.size for c in clusterer.clusters] == [2, 1]
    assert markers[2].map is surface
    assert_partition(clusterer, surface)


def test_remove_marker(surface, make_clusterer, close_markers):
    clusterer = make_clusterer(surface, close_markers)

    assert clusterer.remove_marker(close_markers[2])
    assert not clusterer.remove_marker(close_markers[2])
    assert not clusterer.remove_marker(Marker.at(0.0, 0.0))

    assert clusterer.total_markers == 2
    assert not close_markers[2].on_map
    assert not clusterer.is_assigned(close_markers[2])
    assert clusterer.clusters[0].icon.text == "2"


def test_remove_marker_without_redraw(surface, make_clusterer, close_markers):
    clusterer = make_clusterer(surface, close_markers)
    cluster = clusterer.clusters[0]

    assert clusterer.remove_marker(close_markers[0], no_redraw=True)
    assert clusterer.clusters == [cluster]
    assert clusterer.total_markers == 2


def test_remove_markers(surface, make_clusterer, close_markers):
    clusterer = make_clusterer(surface, close_markers)

    assert clusterer.remove_markers(close_markers[:2])
    assert not clusterer.remove_markers(close_markers[:2])
    assert clusterer.total_markers == 1
    assert clusterer.total_clusters == 1
    assert close_markers[2].map is surface


def test_remove_releases_drag_listener(surface, make_clusterer):
    marker = Marker.at(0.0, 0.0, draggable=True)
    clusterer = make_clusterer(surface, [marker])
    assert surface.listener_count(marker, MapEvent.DRAG_END) == 1

    clusterer.remove_marker(marker)

    assert surface.listener_count(marker, MapEvent.DRAG_END) == 0


def test_draggable_copy_gets_its_own_drag_listener(surface, make_clusterer):
    original = Marker.at(0.0, 0.0, draggable=True)
    copy = original.model_copy()
    clusterer = make_clusterer(surface, [original, copy])

    assert surface.listener_count(original, MapEvent.DRAG_END) == 1
    assert surface.listener_count(copy, MapEvent.DRAG_END) == 1

    clusterer.remove_marker(original)
    assert surface.listener_count(original, MapEvent.DRAG_END) == 0
    assert surface.listener_count(copy, MapEvent.DRAG_END) == 1


def test_clear_markers(surface, make_clusterer, close_markers):
    clusterer = make_clusterer(surface, close_markers + [Marker.at(0.0, 0.3)])

    clusterer.clear_markers()

    assert clusterer.total_markers == 0
    assert clusterer.total_clusters == 0
    assert len(clusterer.assignments) == 0
    assert surface.overlays_of_type(ClusterIcon) == []


def test_reset_viewport_can_hide_markers(surface, make_clusterer):
    marker = Marker.at(0.0, 0.0)
    clusterer = make_clusterer(surface, [marker])
    assert marker.on_map

    clusterer.reset_viewport(hide_markers=True)

    assert not marker.on_map
    assert clusterer.total_clusters == 0
    assert not clusterer.is_assigned(marker)


def test_fit_map_to_markers(surface, make_clusterer):
    clusterer = make_clusterer(surface)
    clusterer.fit_map_to_markers()
    assert surface.fit_history == []

    markers = [Marker.at(10.0, 10.0), Marker.at(20.0, 30.0)]
    clusterer.add_markers(markers)
    clusterer.fit_map_to_markers()

    assert len(surface.fit_history) == 1
    assert surface.get_zoom() == 6
    assert clusterer.previous_zoom == 6
    assert clusterer.total_clusters == 2


def test_option_setters_validate(surface, make_clusterer):
    clusterer = make_clusterer(surface)

    clusterer.grid_size = 30
    assert clusterer.grid_size == 30
    assert clusterer.create_cluster().grid_size == 30

    with pytest.raises(InvalidOptionError):
        clusterer.grid_size = 0
    with pytest.raises(InvalidOptionError):
        clusterer.min_cluster_size = 0
    with pytest.raises(InvalidOptionError):
        clusterer.max_zoom = -1

    clusterer.max_zoom = 0
    assert clusterer.max_zoom == 0


def test_default_styles(surface, make_clusterer):
    clusterer = make_clusterer(surface, image_path="icons/c", image_extension="svg")
    assert [s.url for s in clusterer.styles] == [f"icons/c{i}.svg" for i in range(1, 6)]
    assert [s.width for s in clusterer.styles] == [53, 56, 66, 78, 90]


def test_custom_calculator(surface, close_markers):
    def calculator(markers, num_styles):
        return ClusterSummary(text=f"{len(markers)} pins", index=num_styles)

    clusterer = MarkerClusterer(surface, close_markers, calculator=calculator)

    icon = clusterer.clusters[0].icon
    assert icon.text == "3 pins"
    assert icon.style is clusterer.styles[-1]
    clusterer.close()


def test_strategy_leaving_marker_unassigned_is_logged(surface, close_markers, caplog):
    clusterer = MarkerClusterer(
        surface, close_markers, assignment_strategy=lambda marker, clusters, owner: None
    )

    assert clusterer.total_clusters == 0
    assert "left" in caplog.text
    clusterer.close()


def test_close_releases_everything(surface, close_markers):
    marker = Marker.at(0.0, 0.3, draggable=True)
    clusterer = MarkerClusterer(surface, close_markers + [marker])

    clusterer.close()
    clusterer.close()

    assert surface.listener_count(surface, MapEvent.IDLE) == 0
    assert surface.listener_count(surface, MapEvent.ZOOM_CHANGED) == 0
    assert surface.listener_count(marker, MapEvent.DRAG_END) == 0
    assert not surface.is_attached(clusterer)
    assert surface.overlays_of_type(ClusterIcon) == []

    # A closed clusterer ignores the surface
    surface.set_zoom(12)
    assert clusterer.total_clusters == 0


def test_context_manager_closes(surface, close_markers):
    with MarkerClusterer(surface, close_markers) as clusterer:
        assert clusterer.total_clusters == 1
    assert not surface.is_attached(clusterer)
