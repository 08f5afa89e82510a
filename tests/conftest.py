"""Shared fixtures: a small camera trap data package built in memory.

Deployments::

    d1  Bosbeek      2020-06-01 00:00 -> 2020-06-11 00:00  (10 days, forest)
    d2  Ramsel       2020-06-05 12:00 -> 2020-06-08 12:00  (3 days, wetland)
    d3  Zwarte Beek  2020-06-01 00:00 -> 2020-06-03 00:00  (2 days, forest, no observations)
    d4  Bosbeek      2020-06-20 00:00 -> 2020-06-25 00:00  (5 days, forest, unidentified only)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from camtrap_insights.package import CamtrapPackage

DEPLOYMENTS: list[dict[str, Any]] = [
    {
        "deploymentID": "d1",
        "locationID": "L1",
        "locationName": "Bosbeek",
        "latitude": 51.10,
        "longitude": 4.90,
        "start": "2020-06-01T00:00:00",
        "end": "2020-06-11T00:00:00",
        "habitat": "forest",
        "session": "spring",
    },
    {
        "deploymentID": "d2",
        "locationID": "L2",
        "locationName": "Ramsel",
        "latitude": 51.20,
        "longitude": 4.80,
        "start": "2020-06-05T12:00:00",
        "end": "2020-06-08T12:00:00",
        "habitat": "wetland",
        "session": "spring",
    },
    {
        "deploymentID": "d3",
        "locationID": "L3",
        "locationName": "Zwarte Beek",
        "latitude": 51.25,
        "longitude": 5.00,
        "start": "2020-06-01T00:00:00",
        "end": "2020-06-03T00:00:00",
        "habitat": "forest",
        "session": "spring",
    },
    {
        "deploymentID": "d4",
        "locationID": "L1",
        "locationName": "Bosbeek",
        "latitude": 51.10,
        "longitude": 4.90,
        "start": "2020-06-20T00:00:00",
        "end": "2020-06-25T00:00:00",
        "habitat": "forest",
        "session": "summer",
    },
]

OBSERVATIONS: list[dict[str, Any]] = [
    {
        "observationID": "o1",
        "deploymentID": "d1",
        "sequenceID": "s1",
        "timestamp": "2020-06-02T10:00:00",
        "scientificName": "Anas platyrhynchos",
        "count": 2,
        "sex": "female",
        "lifeStage": "adult",
    },
    {
        "observationID": "o2",
        "deploymentID": "d1",
        "sequenceID": "s2",
        "timestamp": "2020-06-02T10:30:00",
        "scientificName": "Anas platyrhynchos",
        "count": 1,
        "sex": "male",
        "lifeStage": "adult",
    },
    {
        "observationID": "o3",
        "deploymentID": "d1",
        "sequenceID": "s3",
        "timestamp": "2020-06-03T08:00:00",
        "scientificName": "Martes foina",
        "count": 1,
        "sex": "unknown",
        "lifeStage": "adult",
    },
    {
        "observationID": "o4",
        "deploymentID": "d1",
        "sequenceID": "s4",
        "timestamp": "2020-06-04T09:00:00",
        "observationType": "unknown",
        "scientificName": None,
        "count": 1,
    },
    {
        "observationID": "o5",
        "deploymentID": "d2",
        "sequenceID": "s5",
        "timestamp": "2020-06-06T20:00:00",
        "scientificName": "Martes foina",
        "count": 1,
        "sex": "female",
        "lifeStage": "subadult",
    },
    {
        "observationID": "o6",
        "deploymentID": "d2",
        "sequenceID": "s5",
        "timestamp": "2020-06-06T20:00:00",
        "scientificName": "Martes foina",
        "count": 1,
        "sex": "male",
        "lifeStage": "adult",
    },
    {
        "observationID": "o7",
        "deploymentID": "d4",
        "sequenceID": "s6",
        "timestamp": "2020-06-21T05:00:00",
        "observationType": "unknown",
        "scientificName": None,
        "count": 3,
    },
]

TAXONOMIC: list[dict[str, Any]] = [
    {
        "taxonID": "https://www.checklistbank.org/dataset/9910/taxon/DGP6",
        "taxonIDReference": "https://www.checklistbank.org/dataset/9910",
        "scientificName": "Anas platyrhynchos",
        "vernacularNames": {"en": "mallard", "nl": "wilde eend"},
    },
    {
        "taxonID": "https://www.checklistbank.org/dataset/9910/taxon/3Y9VW",
        "taxonIDReference": "https://www.checklistbank.org/dataset/9910",
        "scientificName": "Martes foina",
        "vernacularNames": {"en": "beech marten", "nl": "steenmarter"},
    },
    {
        "taxonID": "https://www.checklistbank.org/dataset/9910/taxon/GCHS",
        "taxonIDReference": "https://www.checklistbank.org/dataset/9910",
        "scientificName": "Ardea cinerea",
        "vernacularNames": {"en": "grey heron", "nl": "blauwe reiger"},
    },
]

MEDIA: list[dict[str, Any]] = [
    {
        "mediaID": "m1",
        "deploymentID": "d1",
        "sequenceID": "s1",
        "timestamp": "2020-06-02T10:00:00",
        "filePath": "https://media.example.org/d1/img1.jpg",
        "fileName": "img1.jpg",
    },
    {
        "mediaID": "m2",
        "deploymentID": "d1",
        "sequenceID": "s1",
        "timestamp": "2020-06-02T10:00:01",
        "filePath": "https://media.example.org/d1/img2.jpg",
        "fileName": "img2.jpg",
    },
    {
        "mediaID": "m3",
        "deploymentID": "d1",
        "sequenceID": "s2",
        "timestamp": "2020-06-02T10:30:00",
        "filePath": "https://media.example.org/d1/img3.jpg",
        "fileName": "img3.jpg",
    },
    {
        "mediaID": "m4",
        "deploymentID": "d2",
        "sequenceID": "s5",
        "timestamp": "2020-06-06T20:00:00",
        "filePath": "https://media.example.org/d2/img4.jpg",
        "fileName": "img4.jpg",
    },
]


@pytest.fixture
def make_package() -> Callable[..., CamtrapPackage]:
    """Factory building a package; any table can be overridden."""

    def _make(
        deployments: list[dict[str, Any]] | None = None,
        observations: list[dict[str, Any]] | None = None,
        taxonomic: list[dict[str, Any]] | None = None,
        media: list[dict[str, Any]] | None = None,
    ) -> CamtrapPackage:
        return CamtrapPackage.from_records(
            deployments=DEPLOYMENTS if deployments is None else deployments,
            observations=OBSERVATIONS if observations is None else observations,
            taxonomic=TAXONOMIC if taxonomic is None else taxonomic,
            media=MEDIA if media is None else media,
        )

    return _make


@pytest.fixture
def package(make_package: Callable[..., CamtrapPackage]) -> CamtrapPackage:
    """The default four-deployment package."""
    return make_package()


@pytest.fixture
def zero_effort_package(make_package: Callable[..., CamtrapPackage]) -> CamtrapPackage:
    """Deployment y runs one day; deployment z starts and ends at the same instant."""
    deployments = [
        {
            "deploymentID": "y",
            "locationName": "Y",
            "latitude": 51.0,
            "longitude": 4.0,
            "start": "2020-06-01T00:00:00",
            "end": "2020-06-02T00:00:00",
        },
        {
            "deploymentID": "z",
            "locationName": "Z",
            "latitude": 51.1,
            "longitude": 4.1,
            "start": "2020-06-01T08:00:00",
            "end": "2020-06-01T08:00:00",
        },
    ]
    observations = [
        {
            "observationID": "oy",
            "deploymentID": "y",
            "timestamp": "2020-06-01T12:00:00",
            "scientificName": "Anas platyrhynchos",
            "count": 1,
        },
        {
            "observationID": "oz",
            "deploymentID": "z",
            "timestamp": "2020-06-01T08:00:00",
            "scientificName": "Anas platyrhynchos",
            "count": 1,
        },
    ]
    return make_package(deployments=deployments, observations=observations, media=[])
