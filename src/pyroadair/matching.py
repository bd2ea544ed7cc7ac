"""Nearest-sample matching.

Distances are squared Euclidean distances in raw longitude/latitude
degrees, which is only a fair approximation at city scale.
"""

from __future__ import annotations

from collections.abc import Sequence

from pyroadair.models.sample import Sample

#: Value returned when there is no sample to match against.
NO_DATA_VALUE = 0.0


def nearest(point: tuple[float, float], samples: Sequence[Sample]) -> float:
    """Return the value of the sample closest to *point*.

    Linear scan; the first sample in input order wins ties.

    Parameters
    ----------
    point : tuple of float
        ``(longitude, latitude)`` to match.
    samples : sequence of Sample
        Candidate samples.

    Returns
    -------
    float
        The matched value, or ``0.0`` when *samples* is empty.
    """
    lon, lat = point
    best_distance = float("inf")
    best_value = NO_DATA_VALUE
    for sample in samples:
        sample_lon, sample_lat = sample.position
        dx = sample_lon - lon
        dy = sample_lat - lat
        distance = dx * dx + dy * dy
        if distance < best_distance:
            best_distance = distance
            best_value = sample.value
    return best_value
