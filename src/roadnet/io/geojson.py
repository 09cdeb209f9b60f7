# io/geojson.py
from collections.abc import Iterable
from typing import Any

from roadnet.domain.entities.network import (
    DEFAULT_NODE_COLOR,
    Node,
    PathType,
    Segment,
    ShortestPathResult,
)

Feature = dict[str, Any]
FeatureCollection = dict[str, Any]


def _fc(features: list[Feature]) -> FeatureCollection:
    return {"type": "FeatureCollection", "features": features}


def _coords(points) -> list[list[float]]:
    return [[x, y] for x, y in points]


def nodes_to_features(nodes: Iterable[Node]) -> FeatureCollection:
    return _fc(
        [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": list(n.coordinates)},
                "properties": {"id": n.id, "color": n.color},
            }
            for n in nodes
        ]
    )


def segment_feature(seg: Segment) -> Feature:
    return {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": _coords(seg.points)},
        "properties": {
            "id": seg.id,
            "startNode": seg.start_node,
            "endNode": seg.end_node,
            "pathType": seg.path_type.value,
        },
    }


def segments_to_features(segments: Iterable[Segment]) -> dict[str, FeatureCollection]:
    """Main and sub paths go to separate layers."""
    layers: dict[str, list[Feature]] = {t.value: [] for t in PathType}
    for seg in segments:
        layers[seg.path_type.value].append(segment_feature(seg))
    return {k: _fc(v) for k, v in layers.items()}


def path_to_feature_collection(
    result: ShortestPathResult | None, nodes: Iterable[Node], *, follow_lines: bool = False
) -> FeatureCollection:
    """
    Highlight layer for a path. `None` gives an empty collection, which
    clears the layer. By default the line runs node-to-node; with
    `follow_lines` it traces the segment polylines instead. A path that
    never leaves its start node is marked with a Point.
    """
    if result is None:
        return _fc([])
    coords = result.line_coordinates() if follow_lines else []
    if len(coords) < 2:
        coords = result.coordinates(nodes)
    if not coords:
        return _fc([])
    if len(coords) == 1:
        geometry = {"type": "Point", "coordinates": list(coords[0])}
    else:
        geometry = {"type": "LineString", "coordinates": _coords(coords)}
    return _fc(
        [
            {
                "type": "Feature",
                "geometry": geometry,
                "properties": {"distance": result.distance, "path": list(result.path)},
            }
        ]
    )


def network_from_features(
    nodes_fc: FeatureCollection, segments_fc: FeatureCollection
) -> tuple[list[Node], list[Segment]]:
    nodes = [
        Node(
            int(f["properties"]["id"]),
            tuple(f["geometry"]["coordinates"]),
            f["properties"].get("color", DEFAULT_NODE_COLOR),
        )
        for f in nodes_fc.get("features", [])
    ]
    # accepts a single collection or the {"main": ..., "sub": ...} layer split
    features = segments_fc.get("features")
    if features is None:
        features = [f for fc in segments_fc.values() for f in fc.get("features", [])]
    segments = []
    for f in features:
        p = f["properties"]
        segments.append(
            Segment(
                int(p["id"]),
                tuple(tuple(c) for c in f["geometry"]["coordinates"]),
                int(p["startNode"]),
                int(p["endNode"]),
                PathType(p.get("pathType", PathType.SUB.value)),
            )
        )
    return nodes, segments
