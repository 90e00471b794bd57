"""Tests for collaborative ranking and weighted fusion."""

import pytest

from workrec.models import ScoredItem, SimilarUser, as_id_score_map
from workrec.scoring.collaborative import rank_collaborative
from workrec.scoring.content import rank_content
from workrec.scoring.fusion import combine_rankings


# ============================================================================
# Collaborative Ranking
# ============================================================================

def test_collaborative_example():
    ranked = rank_collaborative([SimilarUser("u1", 0.8, ("B",))])
    assert ranked == [ScoredItem("B", 0.8)]


def test_scores_are_sums_of_similarity():
    users = [
        SimilarUser("u1", 0.8, ("B", "C")),
        SimilarUser("u2", 0.3, ("B",)),
        SimilarUser("u3", 0.05, ("D", "C")),
    ]
    scores = as_id_score_map(rank_collaborative(users))

    assert scores == {
        "B": pytest.approx(1.1),
        "C": pytest.approx(0.85),
        "D": pytest.approx(0.05),
    }


def test_works_without_likers_are_absent():
    users = [SimilarUser("u1", 0.9, ()), SimilarUser("u2", 0.4, ("X",))]
    ranked = rank_collaborative(users)
    assert [item.work_id for item in ranked] == ["X"]


def test_collaborative_sorted_descending():
    users = [
        SimilarUser("u1", 0.1, ("A",)),
        SimilarUser("u2", 0.9, ("B",)),
        SimilarUser("u3", 0.5, ("C", "A")),
    ]
    ranked = rank_collaborative(users)
    assert [item.work_id for item in ranked] == ["B", "A", "C"]


def test_collaborative_ties_keep_first_liked_order():
    ranked = rank_collaborative([SimilarUser("u1", 0.5, ("X", "Y", "Z"))])
    assert [item.work_id for item in ranked] == ["X", "Y", "Z"]


def test_negative_similarity_accepted():
    ranked = rank_collaborative([SimilarUser("u1", -0.2, ("Z",))])
    assert ranked == [ScoredItem("Z", -0.2)]


def test_collaborative_empty_input():
    assert rank_collaborative([]) == []


# ============================================================================
# Fusion
# ============================================================================

def test_fusion_example():
    content = [ScoredItem("A", 1.0), ScoredItem("B", 0.0)]
    collab = [ScoredItem("B", 0.8)]

    fused = combine_rankings(content, collab)

    assert [item.work_id for item in fused] == ["A", "B"]
    assert fused[0].score == pytest.approx(0.5)
    assert fused[1].score == pytest.approx(0.4)


def test_content_only_weights_reproduce_content_scores(scifi_profile, small_catalog, tags_only):
    content = rank_content(scifi_profile, small_catalog, tags_only)
    collab = [ScoredItem("B", 0.8), ScoredItem("Z", 2.0)]

    fused = as_id_score_map(combine_rankings(content, collab, content_weight=1.0, collab_weight=0.0))

    for item in content:
        assert fused[item.work_id] == item.score
    assert fused["Z"] == 0.0


def test_ids_from_either_list_appear():
    fused = combine_rankings(
        [ScoredItem("A", 1.0)],
        [ScoredItem("B", 1.0)],
        content_weight=0.2,
        collab_weight=0.7
    )
    assert as_id_score_map(fused) == {"B": pytest.approx(0.7), "A": pytest.approx(0.2)}
    assert [item.work_id for item in fused] == ["B", "A"]


def test_weights_outside_unit_range_accepted():
    fused = combine_rankings(
        [ScoredItem("A", 1.0), ScoredItem("B", 0.5)],
        [ScoredItem("A", 1.0)],
        content_weight=2.0,
        collab_weight=-3.0
    )
    assert as_id_score_map(fused) == {"A": pytest.approx(-1.0), "B": pytest.approx(1.0)}
    assert fused[0].work_id == "B"


def test_fusion_ties_keep_first_seen_order():
    fused = combine_rankings(
        [ScoredItem("C", 0.0), ScoredItem("A", 0.0)],
        [ScoredItem("B", 0.0)]
    )
    assert [item.work_id for item in fused] == ["C", "A", "B"]


def test_fusion_empty_inputs():
    assert combine_rankings([], []) == []
