"""End-to-end scoring tests on synthetic drawings."""
import base64

import pytest

from sketch_score import (
    DecodeError,
    DrawingScorer,
    InputValidationError,
    ScoringConfig,
    TargetCache,
    score,
)
from sketch_score.scoring.fusion import round_half_up


def test_self_similarity_scores_100(square_logo):
    result = score(square_logo, square_logo)
    assert result.total_score == 100
    assert result.breakdown.pixel_score == 100.0
    assert result.breakdown.edge_score == 100.0
    assert result.breakdown.ssim_score == pytest.approx(100.0)
    assert not result.insufficient_content


def test_position_invariant(png_factory, square_logo):
    corner = png_factory(rects=[(0, 0, 40, 40)])
    assert score(corner, square_logo).total_score == 100


def test_blank_vs_blank_is_gated(blank_png):
    result = score(blank_png, blank_png)
    assert result.total_score == 1
    assert result.breakdown.is_zeroed
    assert result.insufficient_content


def test_transparent_drawing_is_gated(png_factory, square_logo):
    drawing = png_factory(background=(0, 0, 0, 0))
    assert score(drawing, square_logo).total_score == 1


def test_density_gate_boundary(png_factory):
    below = png_factory(rects=[(50, 50, 3, 109)])   # 327 px
    at = png_factory(rects=[(50, 50, 8, 41)])       # 328 px
    gated = score(below, below)
    assert gated.total_score == 1
    assert gated.breakdown.is_zeroed
    assert score(at, at).total_score == 100


def test_metrics_are_symmetric(square_logo, ring_logo):
    forward = score(square_logo, ring_logo)
    backward = score(ring_logo, square_logo)
    assert forward.breakdown.pixel_score == backward.breakdown.pixel_score
    assert forward.breakdown.edge_score == backward.breakdown.edge_score


def test_idempotent(square_logo, ring_logo):
    assert score(square_logo, ring_logo) == score(square_logo, ring_logo)


def test_weight_invariant_and_bounds(square_logo, ring_logo):
    result = score(ring_logo, square_logo)
    b = result.breakdown
    assert 1 <= result.total_score <= 100
    for value in (b.pixel_score, b.ssim_score, b.edge_score):
        assert 0.0 <= value <= 100.0
    assert b.ssim_contribution == 0.0
    assert abs(result.total_score - (0.70 * b.pixel_score + 0.30 * b.edge_score)) <= 0.51
    assert result.total_score < 100


def test_ring_vs_square_pixel_score(square_logo, ring_logo):
    # ring is a subset of the square: 576 / 1600 raw, x1.5 leniency
    result = score(ring_logo, square_logo)
    assert result.breakdown.pixel_score == round_half_up(100 * 576 / 1600 * 1.5, 2)


def test_custom_size(square_logo, ring_logo):
    result = score(ring_logo, square_logo, size=64)
    assert 1 <= result.total_score <= 100


@pytest.mark.parametrize("size", [0, -5, 2, 12.5, "256", True])
def test_invalid_size(square_logo, size):
    with pytest.raises(InputValidationError):
        score(square_logo, square_logo, size=size)


@pytest.mark.parametrize("drawing", [None, b"", "data:image/png;base64,AAAA", 42])
def test_invalid_drawing_payload(square_logo, drawing):
    with pytest.raises(InputValidationError):
        score(drawing, square_logo)


def test_missing_target(square_logo):
    with pytest.raises(InputValidationError) as exc:
        score(square_logo, None)
    assert exc.value.field == "target logo"


def test_decode_error_propagates(square_logo):
    with pytest.raises(DecodeError):
        score(b"not an image", square_logo)
    with pytest.raises(DecodeError):
        score(square_logo, b"not an image either")


def test_score_data_url(square_logo):
    url = "data:image/png;base64," + base64.b64encode(square_logo).decode("ascii")
    result = DrawingScorer().score_data_url(url, square_logo)
    assert result.total_score == 100


def test_score_data_url_requires_text(square_logo):
    with pytest.raises(InputValidationError):
        DrawingScorer().score_data_url("   ", square_logo)


def test_response_payloads(square_logo):
    result = score(square_logo, square_logo)
    response = result.to_response()
    assert response["score"] == 100
    assert set(response["breakdown"]) == {
        "pixelScore", "ssimScore", "edgeScore",
        "pixelContribution", "ssimContribution", "edgeContribution",
    }
    dumped = result.model_dump(by_alias=True)
    assert set(dumped) == {"totalScore", "breakdown"}


def test_configured_gate(png_factory):
    drawing = png_factory(rects=[(50, 50, 8, 41)])
    strict = DrawingScorer(ScoringConfig(min_content_density=0.01, insufficient_content_score=5))
    assert strict.score(drawing, drawing).total_score == 5


def test_scorer_uses_target_cache(square_logo, ring_logo):
    cache = TargetCache(capacity=4)
    scorer = DrawingScorer(target_cache=cache)
    first = scorer.score(ring_logo, square_logo)
    second = scorer.score(ring_logo, square_logo)
    assert first == second
    assert cache.stats()["misses"] == 1
    assert cache.stats()["hits"] == 1


def test_canvas_size_mismatch_rejected(square_logo):
    from sketch_score.imaging.normalizer import normalize_image

    small = normalize_image(square_logo, ScoringConfig(canvas_size=32))
    large = normalize_image(square_logo, ScoringConfig(canvas_size=64))
    with pytest.raises(ValueError):
        DrawingScorer().score_normalized(small, large)
