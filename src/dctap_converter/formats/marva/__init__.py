"""
Marva Profile Import/Export Module

Converts between workspaces and Marva (Sinopia-style) profile JSON, and
infers folders from LC shape ids.

Usage:
    from dctap_converter.formats.marva import MarvaProfileConverter, classify_folder

    converter = MarvaProfileConverter(store)
    result = converter.import_file("profiles.json", "LC Profiles")
    documents = converter.export_profiles(result.workspace_id)

    classify_folder("lc:RT:bf2:Title:Lookup")   # "RT_bf2_Title"
"""

from .folder_classifier import classify_folder

from .marva_models import (
    MarvaDefault,
    MarvaProfile,
    MarvaProfileDocument,
    MarvaPropertyTemplate,
    MarvaPropertyType,
    MarvaResourceTemplate,
    MarvaValueConstraint,
)

from .marva_converter import (
    MarvaProfileConverter,
    parse_documents,
    property_template_to_row,
    row_to_property_template,
)

__all__ = [
    "classify_folder",
    "MarvaDefault",
    "MarvaProfile",
    "MarvaProfileDocument",
    "MarvaPropertyTemplate",
    "MarvaPropertyType",
    "MarvaResourceTemplate",
    "MarvaValueConstraint",
    "MarvaProfileConverter",
    "parse_documents",
    "property_template_to_row",
    "row_to_property_template",
]
