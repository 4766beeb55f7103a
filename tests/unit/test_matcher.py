"""
Unit tests for cosine similarity and gallery matching.
"""
import math

import pytest
from facewatch.domain.models.gallery_entry import GalleryEntry
from facewatch.processing.face.matcher import FaceMatcher, cosine_similarity


def _entry(entry_id, embedding, name=None):
    return GalleryEntry(id=entry_id, name=name or entry_id, embedding=embedding)


def _probe_with_similarity(value):
    """Unit vector whose cosine similarity with [1, 0] is value."""
    return [value, math.sqrt(1.0 - value * value)]


class TestCosineSimilarity:
    """Tests for cosine_similarity"""

    def test_self_similarity_is_one(self):
        v = [0.3, -1.2, 4.0, 0.5]
        assert cosine_similarity(v, v) == pytest.approx(1.0)

    def test_symmetric(self):
        a = [1.0, 2.0, 3.0]
        b = [-2.0, 0.5, 1.0]
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_orthogonal_and_opposite(self):
        assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)
        assert cosine_similarity([1, 0], [-1, 0]) == pytest.approx(-1.0)

    def test_degenerate_inputs_return_zero(self):
        assert cosine_similarity([0, 0], [1, 1]) == 0.0
        assert cosine_similarity([1, 2, 3], [1, 2]) == 0.0
        assert cosine_similarity([], []) == 0.0

    def test_scale_invariant(self):
        assert cosine_similarity([1, 2], [10, 20]) == pytest.approx(1.0)


class TestFaceMatcher:
    """Tests for FaceMatcher.recognize"""

    def test_alice_above_threshold_is_recognized(self):
        matcher = FaceMatcher(threshold=0.7)
        alice = _entry("alice-id", [1.0, 0.0], name="Alice")
        identity = matcher.recognize(_probe_with_similarity(0.75), [alice])
        assert identity.name == "Alice"
        assert identity.user_id == "alice-id"
        assert identity.confidence == pytest.approx(0.75)

    def test_alice_below_threshold_is_unknown(self):
        matcher = FaceMatcher(threshold=0.7)
        alice = _entry("alice-id", [1.0, 0.0], name="Alice")
        identity = matcher.recognize(_probe_with_similarity(0.65), [alice])
        assert identity.name == "Unknown"
        assert identity.confidence == 0.0
        assert not identity.is_known

    def test_raising_threshold_never_adds_matches(self):
        alice = _entry("alice", [1.0, 0.0])
        probe = _probe_with_similarity(0.8)
        matcher = FaceMatcher(threshold=0.5)
        assert matcher.recognize(probe, [alice]).is_known
        matcher.threshold = 0.85
        assert not matcher.recognize(probe, [alice]).is_known

    def test_best_match_wins(self):
        matcher = FaceMatcher(threshold=0.5)
        entries = [
            _entry("bob", _probe_with_similarity(0.8)),
            _entry("carol", _probe_with_similarity(0.95)),
        ]
        assert matcher.recognize([1.0, 0.0], entries).name == "carol"

    def test_tie_goes_to_first_entry(self):
        matcher = FaceMatcher(threshold=0.5)
        entries = [_entry("first", [1.0, 0.0]), _entry("second", [2.0, 0.0])]
        assert matcher.recognize([1.0, 0.0], entries).name == "first"

    def test_empty_gallery_is_unknown(self):
        assert FaceMatcher().recognize([1.0, 0.0], []).name == "Unknown"

    def test_unembedded_entries_are_ignored(self):
        matcher = FaceMatcher(threshold=0.5)
        entries = [_entry("pending", None), _entry("dave", [1.0, 0.0])]
        assert matcher.recognize([1.0, 0.0], entries).name == "dave"

    def test_missing_embedding_is_unknown(self):
        assert FaceMatcher().recognize(None, [_entry("x", [1.0])]).name == "Unknown"

    @pytest.mark.parametrize("value, expected", [(0.1, 0.3), (1.5, 0.9), (0.6, 0.6)])
    def test_threshold_clamped(self, value, expected):
        matcher = FaceMatcher()
        matcher.threshold = value
        assert matcher.threshold == pytest.approx(expected)
