"""Shared pytest fixtures and configuration."""

from collections.abc import Iterator
from typing import Any

import pytest

from geocodec.config import Settings
from geocodec.geometry import (
    GeometryCollection,
    LineString,
    LineStringZ,
    MultiLineString,
    MultiPoint,
    MultiPointZ,
    MultiPolygon,
    MultiPolygonZ,
    Point,
    PointZ,
    Polygon,
    PolygonZ,
)
from geocodec.geometry.primitives import Geometry
from geocodec.utils.logging import clear_log_context, configure_logging


@pytest.fixture(autouse=True)
def reset_logging_context() -> Iterator[None]:
    """Reset log context between tests."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
def configure_test_logging() -> Iterator[None]:
    """Configure logging for tests with console output."""
    configure_logging(level="DEBUG", log_format="console")
    yield


SQUARE = ((0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (0.0, 0.0))
HOLE = ((1.0, 1.0), (2.0, 1.0), (2.0, 2.0), (1.0, 1.0))
SQUARE_Z = tuple((x, y, 10.0) for x, y in SQUARE)


@pytest.fixture
def every_geometry() -> list[Geometry]:
    """One instance of every variant, 2D and Z, including empty forms."""
    return [
        Point(coordinates=(1.5, -2.25)),
        Point(coordinates=None),
        PointZ(coordinates=(1.0, 2.0, 3.0)),
        PointZ(coordinates=None),
        LineString(coordinates=((0, 0), (1, 1), (2, 0))),
        LineString(coordinates=()),
        LineStringZ(coordinates=((0, 0, 0), (1, 1, 1))),
        Polygon(coordinates=(SQUARE, HOLE)),
        Polygon(coordinates=()),
        PolygonZ(coordinates=(SQUARE_Z,)),
        MultiPoint(coordinates=((0, 0), (5, 5))),
        MultiPointZ(coordinates=((0, 0, 1), (5, 5, 2))),
        MultiLineString(coordinates=(((0, 0), (1, 1)), ((2, 2), (3, 3)))),
        MultiLineString(coordinates=()),
        MultiPolygon(coordinates=((SQUARE, HOLE), (SQUARE,))),
        MultiPolygonZ(coordinates=((SQUARE_Z,),)),
        GeometryCollection(
            geometries=(
                Point(coordinates=(1, 2)),
                LineStringZ(coordinates=((0, 0, 0), (1, 1, 1))),
                GeometryCollection(geometries=(Polygon(coordinates=(SQUARE,)),)),
            )
        ),
        GeometryCollection(geometries=()),
    ]


@pytest.fixture
def feature_collection() -> dict[str, Any]:
    """A FeatureCollection whose second feature has a null geometry."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "id": "a",
                "geometry": {"type": "Point", "coordinates": [1, 2]},
                "properties": {"name": "first"},
            },
            {"type": "Feature", "id": "b", "geometry": None, "properties": {}},
            {
                "type": "Feature",
                "id": "c",
                "geometry": {"type": "LineString", "coordinates": [[0, 0], [1, 1]]},
                "properties": {"name": "third"},
            },
        ],
    }
