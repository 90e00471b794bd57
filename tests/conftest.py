"""Shared fixtures for workrec tests."""

import logging

import pytest

from workrec.logging_utils import ROOT_LOGGER_NAME
from workrec.models import (
    MetricsConfig,
    RecommendationRequest,
    ScoredItem,
    SimilarUser,
    Tag,
    UserProfile,
    Work,
)


SNAPSHOT_TEXT = """\
USER_PROFILE
1
scifi 1.0
WORKS
2
A
1
scifi 1.0
10 5
B
1
drama 1.0
0 0
SIMILAR_USERS
1
u1
0.8
1
B
PARAMS
2 0
METRICS_CONFIG
0 0 0 1
"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers attached by setup_pipeline_logger between tests."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def scifi_profile():
    return UserProfile(tags=(Tag("scifi", 1.0),))


@pytest.fixture
def small_catalog():
    return (
        Work("A", (Tag("scifi", 1.0),), view_count=10, interaction_time=5),
        Work("B", (Tag("drama", 1.0),), view_count=0, interaction_time=0),
    )


@pytest.fixture
def tags_only():
    return MetricsConfig(use_metrics=False, weight_tags=1.0)


@pytest.fixture
def example_request(scifi_profile, small_catalog, tags_only):
    return RecommendationRequest(
        profile=scifi_profile,
        catalog=small_catalog,
        similar_users=(SimilarUser("u1", 0.8, ("B",)),),
        metrics_config=tags_only,
        num_recommendations=2,
        random_factor=0.0,
    )


@pytest.fixture
def fused_five():
    return [
        ScoredItem("A", 5.0),
        ScoredItem("B", 4.0),
        ScoredItem("C", 3.0),
        ScoredItem("D", 2.0),
        ScoredItem("E", 1.0),
    ]


@pytest.fixture
def snapshot_text():
    return SNAPSHOT_TEXT
