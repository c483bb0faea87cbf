"""Tests for folder inference from LC shape ids."""

import pytest

from dctap_converter.formats.marva import classify_folder


@pytest.mark.unit
class TestClassifyFolder:
    """Folder names derived from id segments."""

    @pytest.mark.parametrize("shape_id,expected", [
        ("lc:profile:bf2:Work", "profile_bf2"),
        ("lc:RT:bf2:Title:LookupTitleLc", "RT_bf2_Title"),
        ("lc:RT:bflc:Agents:PersonLite", "RT_bflc_Agents"),
        ("lc:RT:bf2:Work:Text", "RT_bf2_Work"),
        ("lc:RT:bf2:Instance", "RT_bf2_Instance"),
        ("lc:RT:bf2", "RT_bf2"),
        ("lc:profile:bf2", "profile_bf2"),
    ])
    def test_lc_ids(self, shape_id, expected):
        assert classify_folder(shape_id) == expected

    @pytest.mark.parametrize("shape_id", [
        None,
        "",
        "Person",
        "lc:RT",
        "sinopia:RT:bf2:Work",
        "lc::bf2:Work",
        "lc:RT::Work",
        "lc:RT:has space:Work",
        "lc:RT:" + "g" * 21 + ":Work",
    ])
    def test_unclassifiable(self, shape_id):
        assert classify_folder(shape_id) is None

    def test_long_subgroup_falls_back(self):
        """A subgroup that is too long keeps only the group folder."""
        assert classify_folder("lc:RT:bf2:" + "s" * 31) == "RT_bf2"

    def test_subgroup_with_space_falls_back(self):
        assert classify_folder("lc:RT:bf2:Two words:X") == "RT_bf2"

    def test_only_resource_templates_narrow(self):
        """Profile ids never use the fourth segment."""
        assert classify_folder("lc:profile:bf2:Work:Extra") == "profile_bf2"

    def test_group_length_boundary(self):
        assert classify_folder("lc:RT:" + "g" * 20) == "RT_" + "g" * 20
