"""
Tests for the atlas descriptor and the description file schema
"""
import json
import os
import tempfile

import pytest
from pydantic import ValidationError

from atlaspacker.descriptor import describe, identity_layers
from atlaspacker.packing import Placement
from atlaspacker.schema import AtlasDescription, AtlasEntry


EXPECTED_RON = """(
    frames: [
        (
            layer: 0,
            x: 0,
            y: 0,
            width: 16,
            height: 8,
        ),
        (
            layer: 1,
            x: 16,
            y: 4,
            width: 2,
            height: 3,
        ),
    ],
    size: (64, 64),
    file: "icons.ktx2",
)"""


class TestDescribe:
    """Test mapping placements to atlas entries"""

    def test_identity_layers(self):
        """Test that bin N maps to layer N"""
        assert identity_layers(3) == {0: 0, 1: 1, 2: 2}
        assert identity_layers(1) == {0: 0}

    def test_describe_keeps_order_and_geometry(self):
        """Test that entries follow placement order and copy geometry"""
        placements = [
            Placement("b.png", 1, 10, 20, 30, 40),
            Placement("a.png", 0, 0, 0, 5, 6),
        ]
        entries = describe(placements, identity_layers(2))
        assert list(entries) == ["b.png", "a.png"]
        assert entries["b.png"] == AtlasEntry(layer=1, x=10, y=20, width=30, height=40)
        assert entries["a.png"] == AtlasEntry(layer=0, x=0, y=0, width=5, height=6)

    def test_describe_uses_caller_layer_mapping(self):
        """Test that a custom bin to layer assignment is applied"""
        placements = [Placement("a", 0, 0, 0, 1, 1), Placement("b", 1, 0, 0, 1, 1)]
        entries = describe(placements, {0: 1, 1: 0})
        assert entries["a"].layer == 1
        assert entries["b"].layer == 0

    def test_describe_missing_layer(self):
        """Test that an unmapped bin is reported"""
        with pytest.raises(KeyError):
            describe([Placement("a", 3, 0, 0, 1, 1)], identity_layers(2))

    def test_describe_empty(self):
        """Test that no placements give no entries"""
        assert describe([], identity_layers(1)) == {}


class TestAtlasDescription:
    """Test description rendering and validation"""

    def _description(self):
        return AtlasDescription(
            frames=[
                AtlasEntry(layer=0, x=0, y=0, width=16, height=8),
                AtlasEntry(layer=1, x=16, y=4, width=2, height=3),
            ],
            size=(64, 64),
            file="icons.ktx2",
        )

    def test_to_ron(self):
        """Test the RON rendering"""
        assert self._description().to_ron() == EXPECTED_RON

    def test_to_ron_without_frames(self):
        """Test that an empty frame list renders inline"""
        ron = AtlasDescription(size=(8, 8), file="empty.ktx2").to_ron()
        assert "    frames: []," in ron
        assert ron.endswith(")")

    def test_to_json(self):
        """Test the JSON rendering"""
        data = json.loads(self._description().to_json())
        assert data["size"] == [64, 64]
        assert data["file"] == "icons.ktx2"
        assert data["frames"][1] == {"layer": 1, "x": 16, "y": 4, "width": 2, "height": 3}

    def test_save_infers_format(self):
        """Test that save() picks the format from the extension"""
        desc = self._description()
        with tempfile.TemporaryDirectory() as tmpdir:
            ron_path = os.path.join(tmpdir, "atlas.ron")
            json_path = os.path.join(tmpdir, "atlas.json")
            desc.save(ron_path)
            desc.save(json_path)

            with open(ron_path) as f:
                assert f.read() == EXPECTED_RON
            assert AtlasDescription.load_json(json_path) == desc

    def test_save_writes_utf8(self):
        """Test that non-ASCII file names are written and read back as UTF-8"""
        desc = AtlasDescription(size=(8, 8), file="épée_ß.ktx2")
        with tempfile.TemporaryDirectory() as tmpdir:
            ron_path = os.path.join(tmpdir, "atlas.ron")
            json_path = os.path.join(tmpdir, "atlas.json")
            desc.save(ron_path)
            desc.save(json_path)

            with open(ron_path, 'rb') as f:
                assert '"épée_ß.ktx2"'.encode('utf-8') in f.read()
            assert AtlasDescription.load_json(json_path).file == "épée_ß.ktx2"

    def test_save_rejects_unknown_extension(self):
        """Test that unknown extensions need an explicit format"""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ValueError, match="Cannot infer"):
                self._description().save(os.path.join(tmpdir, "atlas.txt"))
            self._description().save(os.path.join(tmpdir, "atlas.txt"), fmt="json")

    def test_render_unknown_format(self):
        """Test that unsupported formats are rejected"""
        with pytest.raises(ValueError):
            self._description().render("yaml")

    @pytest.mark.parametrize("field,value", [("x", -1), ("width", 0), ("layer", -2)])
    def test_entry_validation(self, field, value):
        """Test that negative offsets and empty sizes are rejected"""
        data = {"layer": 0, "x": 0, "y": 0, "width": 1, "height": 1, field: value}
        with pytest.raises(ValidationError):
            AtlasEntry(**data)

    def test_description_validation(self):
        """Test that sheet size and file name are validated"""
        with pytest.raises(ValidationError):
            AtlasDescription(size=(0, 64), file="a.ktx2")
        with pytest.raises(ValidationError):
            AtlasDescription(size=(64, 64), file="")
        with pytest.raises(ValidationError):
            AtlasDescription(size=(64, 64), file="a.ktx2", extra=1)
