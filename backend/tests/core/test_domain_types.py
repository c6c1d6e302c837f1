"""Domain Types — identity wrappers, bounds and enums."""

from lotr_api.core.domain_types import (
    MAX_RATING, MIN_RATING, Environment, HealthStatus,
    MovieId, RemoteResource, ReviewId,
)


def test_identity_types_wrap_primitives():
    assert ReviewId(7) == 7
    assert MovieId("5cd95395de30eff6ebccde56") == "5cd95395de30eff6ebccde56"


def test_rating_bounds():
    assert (MIN_RATING, MAX_RATING) == (1, 5)


def test_remote_resource_segments_and_labels():
    assert RemoteResource.MOVIE.value == "movie"
    assert RemoteResource.MOVIE.label == "Movie"
    assert RemoteResource.MOVIE.id_field == "movieId"
    assert RemoteResource.CHARACTER.id_field == "characterId"


def test_enums_serialize_to_string():
    assert Environment.PRODUCTION.value == "production"
    assert HealthStatus.UNHEALTHY.value == "unhealthy"
