"""
PathCodec Unit Tests

Tests path splitting, joining, flattening and ancestor computation
"""

import pytest
from deepstore.core.accessor import PathAccessor
from deepstore.core.path import PathCodec
from deepstore.exceptions.errors import ConfigError, InvalidPathError


class TestPathSplit:
    """Test path splitting"""

    def test_split_single_segment(self):
        """Test single-segment path yields one segment"""
        assert PathCodec().split("a") == ["a"]

    def test_split_nested(self):
        """Test nested path"""
        assert PathCodec().split("a.b.c") == ["a", "b", "c"]

    def test_split_custom_separator(self):
        """Test custom separator leaves dots inside segments"""
        codec = PathCodec(separator="/")
        assert codec.split("user/first.name") == ["user", "first.name"]

    def test_split_empty_path(self):
        """Test empty path is rejected"""
        with pytest.raises(InvalidPathError):
            PathCodec().split("")

    def test_split_non_string(self):
        """Test non-string path is rejected"""
        with pytest.raises(InvalidPathError):
            PathCodec().split(42)

    @pytest.mark.parametrize("path", ["a..b", ".a", "a."])
    def test_split_empty_segment(self, path):
        """Test empty segments are rejected"""
        with pytest.raises(InvalidPathError):
            PathCodec().split(path)


class TestPathJoin:
    """Test path joining"""

    def test_join_round_trip(self):
        """Test split then join reproduces the path"""
        codec = PathCodec()
        for path in ["a", "a.b", "user.address.city"]:
            assert codec.join(codec.split(path)) == path

    def test_join_segment_with_separator(self):
        """Test segment containing the separator is rejected"""
        with pytest.raises(InvalidPathError):
            PathCodec().join(["a", "b.c"])

    def test_join_empty(self):
        """Test empty segment list is rejected"""
        with pytest.raises(InvalidPathError):
            PathCodec().join([])


class TestFlatten:
    """Test record flattening"""

    def test_flatten_nested(self):
        """Test nested mappings become dot-paths"""
        record = {"a": {"b": {"c": 1}, "d": 2}, "e": "x"}
        assert PathCodec().flatten(record) == {"a.b.c": 1, "a.d": 2, "e": "x"}

    def test_flatten_keeps_leaves(self):
        """Test lists, empty mappings and None are leaves"""
        record = {"items": [1, {"x": 1}], "empty": {}, "none": None}
        assert PathCodec().flatten(record) == {
            "items": [1, {"x": 1}],
            "empty": {},
            "none": None,
        }

    def test_flatten_empty_record(self):
        """Test empty record"""
        assert PathCodec().flatten({}) == {}

    def test_flatten_custom_separator(self):
        """Test flattening joins with the codec separator"""
        assert PathCodec(separator="/").flatten({"a": {"b": 1}}) == {"a/b": 1}

    @pytest.mark.parametrize("separator", [".", "/", "::"])
    def test_flatten_paths_resolve_to_leaves(self, separator):
        """Test every flattened path reads back its flattened value"""
        codec = PathCodec(separator=separator)
        accessor = PathAccessor(codec)
        record = {
            "user": {"name": "x", "address": {"city": "y", "zip": None}},
            "tags": [1, {"k": "v"}],
            "count": 0,
            "flags": {"on": True, "nested": {"deep": {"deeper": 1.5}}},
        }

        flat = codec.flatten(record)

        assert len(flat) == 7
        for path, value in flat.items():
            assert accessor.get(record, path, default="absent") == value

    def test_flatten_does_not_mutate(self):
        """Test input record is untouched"""
        record = {"a": {"b": 1}}
        PathCodec().flatten(record)
        assert record == {"a": {"b": 1}}


class TestAncestors:
    """Test ancestor and wildcard paths"""

    def test_ancestors_parent_first(self):
        """Test ancestors run from immediate parent to root"""
        assert PathCodec().ancestors("a.b.c") == ["a.b", "a"]

    def test_ancestors_root_level(self):
        """Test single-segment path has no ancestors"""
        assert PathCodec().ancestors("a") == []

    def test_wildcard_path(self):
        """Test wildcard path"""
        codec = PathCodec()
        assert codec.wildcard_path("user") == "user.*"
        assert codec.is_wildcard("user.*")
        assert not codec.is_wildcard("user.name")


class TestCodecConfig:
    """Test codec construction"""

    def test_empty_separator(self):
        """Test empty separator is rejected"""
        with pytest.raises(ConfigError):
            PathCodec(separator="")

    def test_wildcard_containing_separator(self):
        """Test wildcard containing the separator is rejected"""
        with pytest.raises(ConfigError):
            PathCodec(separator="*")
