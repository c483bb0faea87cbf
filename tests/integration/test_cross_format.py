"""Integration tests for cross-format conversions.

Data moves between the Marva, CSV and starting-point converters through
the same store, so each converter has to read what the others write.
"""

import pytest

from dctap_converter.formats.csv import CSVConverter
from dctap_converter.formats.marva import MarvaProfileConverter, parse_documents
from dctap_converter.formats.starting_point import StartingPointConverter


@pytest.mark.integration
class TestMarvaThroughCSV:
    """Marva import -> CSV export -> CSV import -> Marva export."""

    @pytest.fixture
    def csv_copy(self, store, work_profile_document):
        marva = MarvaProfileConverter(store)
        imported = marva.import_profiles("LC Work", parse_documents([work_profile_document]))
        text = CSVConverter(store).export_workspace(imported.workspace_id)
        result = CSVConverter(store).import_to_workspace(text, "LC Work (csv)")
        assert result.success
        return result

    def test_shape_set_survives(self, store, csv_copy):
        shape_ids = [s.shape_id for s in store.shapes.list(csv_copy.workspace_id)]
        assert shape_ids == ["lc:RT:bf2:Work:Text", "lc:profile:bf2:Work"]
        assert csv_copy.rows_imported == 4
        assert csv_copy.unknown_namespaces == []

    def test_profile_structure_survives(self, store, csv_copy):
        documents = MarvaProfileConverter(store).export_profiles(csv_copy.workspace_id)

        assert len(documents) == 1
        profile = documents[0]["json"]["Profile"]
        assert profile["id"] == "lc:profile:bf2:Work"
        assert [rt["id"] for rt in profile["resourceTemplates"]] == ["lc:RT:bf2:Work:Text"]

        template = profile["resourceTemplates"][0]
        assert template["resourceURI"] == "http://id.loc.gov/ontologies/bibframe/Text"
        props = template["propertyTemplates"]
        assert [p["propertyURI"] for p in props] == [
            "http://id.loc.gov/ontologies/bibframe/title",
            "http://id.loc.gov/ontologies/bibframe/language",
            "http://id.loc.gov/ontologies/bibframe/note",
        ]
        assert [p["type"] for p in props] == ["resource", "lookup", "literal"]

    def test_piped_refs_decode_back_to_lists(self, store, csv_copy):
        documents = MarvaProfileConverter(store).export_profiles(csv_copy.workspace_id)
        title = documents[0]["json"]["Profile"]["resourceTemplates"][0]["propertyTemplates"][0]

        assert title["valueConstraint"]["valueTemplateRefs"] == ["lc:RT:bf2:WorkTitle", "lc:RT:bf2:VarTitle"]


@pytest.mark.integration
class TestStartingPointsAlongsideProfiles:
    """Starting-point shapes share a workspace with profile shapes."""

    @pytest.fixture
    def workspace_id(self, store, work_profile_document, starting_points_document):
        imported = MarvaProfileConverter(store).import_profiles(
            "LC Work", parse_documents([work_profile_document])
        )
        StartingPointConverter(store).import_starting_points(imported.workspace_id, starting_points_document)
        return imported.workspace_id

    def test_marva_export_ignores_starting_points(self, store, workspace_id):
        documents = MarvaProfileConverter(store).export_profiles(workspace_id)

        assert [d["json"]["Profile"]["id"] for d in documents] == ["lc:profile:bf2:Work"]

    def test_csv_export_includes_starting_points(self, store, workspace_id):
        text = CSVConverter(store).export_workspace(workspace_id)
        shape_cells = [line.split(",")[0] for line in text.split("\n")[1:]]

        assert "startingpoint:Monograph" in shape_cells
        assert "startingpoint:index" in shape_cells

    def test_starting_points_export_unchanged_by_profiles(self, store, workspace_id):
        exported = StartingPointConverter(store).export_starting_points(workspace_id)

        assert [g["menuGroup"] for g in exported[0]["json"]] == ["Monograph", "Notated Music"]
