"""Tests for per-scale fixture loading."""

import json

import pytest

from leb.data import SCALE_LIMITS, DataLoader, DataLoadError, apply_scale_limits
from leb.models import Scale


def _fixture(products: int = 600) -> dict:
    return {
        "products": [{"id": i} for i in range(products)],
        "collections": [
            {"title": f"c{i}", "products": [{"id": j} for j in range(products)]}
            for i in range(60)
        ],
        "cart_items": [{"id": i} for i in range(60)],
        "posts": [{"id": i} for i in range(60)],
        "user": {"name": "Ada"},
    }


class TestApplyScaleLimits:
    """Tests for truncating records to a scale."""

    @pytest.mark.parametrize("scale", list(Scale))
    def test_lists_truncated(self, scale):
        limited = apply_scale_limits(_fixture(), scale)
        limits = SCALE_LIMITS[scale]
        for key, limit in limits.items():
            assert len(limited[key]) == limit

    def test_nested_products_capped(self):
        limited = apply_scale_limits(_fixture(), Scale.SMALL)
        assert all(len(c["products"]) == 10 for c in limited["collections"])

    def test_other_keys_untouched(self):
        limited = apply_scale_limits(_fixture(), "medium")
        assert limited["user"] == {"name": "Ada"}

    def test_short_lists_kept(self):
        limited = apply_scale_limits({"products": [1, 2]}, Scale.LARGE)
        assert limited["products"] == [1, 2]

    def test_input_not_mutated(self):
        data = _fixture()
        apply_scale_limits(data, Scale.SMALL)
        assert len(data["products"]) == 600


class TestDataLoader:
    """Tests for reading fixture files."""

    def test_load_json(self, tmp_path):
        (tmp_path / "small.json").write_text(json.dumps(_fixture()), encoding="utf-8")
        data = DataLoader(tmp_path).load(Scale.SMALL)
        assert len(data["products"]) == 10

    def test_load_yaml(self, tmp_path):
        (tmp_path / "medium.yaml").write_text(
            "user:\n  name: Ada\nproducts:\n  - id: 1\n", encoding="utf-8"
        )
        data = DataLoader(tmp_path).load("medium")
        assert data == {"user": {"name": "Ada"}, "products": [{"id": 1}]}

    def test_missing_fixture_is_empty(self, tmp_path):
        assert DataLoader(tmp_path).load(Scale.LARGE) == {}

    def test_cached(self, tmp_path):
        path = tmp_path / "small.json"
        path.write_text('{"user": {"name": "Ada"}}', encoding="utf-8")
        loader = DataLoader(tmp_path)
        first = loader.load(Scale.SMALL)
        path.write_text('{"user": {"name": "Bob"}}', encoding="utf-8")
        assert loader.load(Scale.SMALL) is first

    def test_unparsable(self, tmp_path):
        (tmp_path / "small.json").write_text("{oops", encoding="utf-8")
        with pytest.raises(DataLoadError) as exc_info:
            DataLoader(tmp_path).load(Scale.SMALL)
        assert exc_info.value.path == tmp_path / "small.json"

    def test_not_an_object(self, tmp_path):
        (tmp_path / "small.json").write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(DataLoadError, match="must contain an object"):
            DataLoader(tmp_path).load(Scale.SMALL)
