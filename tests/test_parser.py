"""Tests for the token tree parser."""

import pytest
from token_translator.parser import TokenTreeParser
from token_translator.models import TokenGroup, TokenLeaf


class TestTokenTreeParser:
    """Tests for TokenTreeParser class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = TokenTreeParser()

    def test_parse_valid_document(self):
        """Test parsing a token document."""
        data = self.parser.parse('{"a": {"$value": "X", "$type": "string"}}')

        assert data == {"a": {"$value": "X", "$type": "string"}}

    def test_parse_invalid_json_syntax(self):
        """Test parsing invalid JSON syntax."""
        with pytest.raises(ValueError, match="Invalid JSON input"):
            self.parser.parse('{"a": {"$value": "X"}')

    def test_parse_empty_json(self):
        """Test parsing empty JSON string."""
        with pytest.raises(ValueError, match="Invalid JSON input"):
            self.parser.parse("   ")

    def test_parse_non_object_root(self):
        """Test a root that is not an object is rejected."""
        with pytest.raises(ValueError, match="Root element must be an object"):
            self.parser.parse('[{"$value": "X"}]')

    def test_build_leaf(self):
        """Test a child holding $value becomes a leaf."""
        tree = self.parser.build_tree({
            "save": {
                "$value": "Save",
                "$type": "string",
                "$extensions": {"com.figma": {"variableId": "VariableID:1:2"}}
            }
        })

        leaf = tree.children["save"]
        assert isinstance(leaf, TokenLeaf)
        assert leaf.value == "Save"
        assert leaf.token_type == "string"
        assert leaf.figma_variable_id == "VariableID:1:2"

    def test_leaf_with_null_value(self):
        """Test presence of $value, not its truthiness, marks a leaf."""
        tree = self.parser.build_tree({"empty": {"$value": None}})

        assert isinstance(tree.children["empty"], TokenLeaf)
        assert tree.children["empty"].value is None

    def test_build_group_with_extensions(self):
        """Test a group keeps its $extensions without treating them as a child."""
        tree = self.parser.build_tree({
            "theme": {
                "$extensions": {"note": "x"},
                "color": {"$value": "red"}
            }
        })

        group = tree.children["theme"]
        assert isinstance(group, TokenGroup)
        assert group.extensions == {"note": "x"}
        assert list(group.children) == ["color"]

    def test_non_object_children_skipped(self):
        """Test scalars, arrays and $-metadata at group level are ignored."""
        tree = self.parser.build_tree({
            "$description": "root",
            "list": [{"$value": "X"}],
            "number": 3,
            "nothing": None,
            "ok": {"$value": "Y"}
        })

        assert list(tree.children) == ["ok"]

    def test_non_object_root_yields_empty_tree(self):
        """Test building never raises for non-object input."""
        assert self.parser.build_tree([1, 2]).children == {}
        assert self.parser.build_tree("text").children == {}
        assert self.parser.build_tree(None).children == {}

    def test_invalid_metadata_ignored(self):
        """Test non-string $type and non-object $extensions are dropped."""
        tree = self.parser.build_tree({
            "a": {"$value": "X", "$type": 5, "$extensions": "nope"},
            "g": {"$extensions": [1], "b": {"$value": "Y"}}
        })

        assert tree.children["a"].token_type is None
        assert tree.children["a"].extensions is None
        assert tree.children["g"].extensions is None

    def test_walk_order(self):
        """Test walk yields groups before their children in document order."""
        tree = self.parser.build_tree({
            "a": {"x": {"$value": "1"}, "y": {"$value": "2"}},
            "b": {"$value": "3"}
        })

        assert [path for path, _ in tree.walk()] == ["a", "a.x", "a.y", "b"]
        assert tree.count_leaves() == 3

    def test_parse_tree(self):
        """Test parsing text straight into a typed tree."""
        tree = self.parser.parse_tree('{"a": {"b": {"$value": "X"}}}')

        assert isinstance(tree.children["a"].children["b"], TokenLeaf)

    def test_build_deeply_nested_tree(self):
        """Test nesting deeper than the recursion limit is built and walked."""
        depth = 3000
        data = {"$value": "deep"}
        for _ in range(depth):
            data = {"g": data}

        tree = self.parser.build_tree(data)
        paths = [path for path, _ in tree.walk()]

        assert len(paths) == depth
        assert paths[-1] == ".".join(["g"] * depth)
        assert tree.count_leaves() == 1
