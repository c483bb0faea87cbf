"""
Marva profile test fixtures.
"""

# =============================================================================
# Profile Documents
# =============================================================================

WORK_PROFILE_DOCUMENT = {
    "id": "doc-1",
    "name": "Work",
    "configType": "profile",
    "json": {
        "Profile": {
            "id": "lc:profile:bf2:Work",
            "title": "BIBFRAME Work",
            "description": "Work profile",
            "resourceTemplates": [
                {
                    "id": "lc:RT:bf2:Work:Text",
                    "resourceURI": "http://id.loc.gov/ontologies/bibframe/Text",
                    "resourceLabel": "Text",
                    "remark": "Textual work",
                    "propertyTemplates": [
                        {
                            "propertyURI": "http://id.loc.gov/ontologies/bibframe/title",
                            "propertyLabel": "Title",
                            "mandatory": "true",
                            "repeatable": "false",
                            "type": "resource",
                            "valueConstraint": {
                                "valueTemplateRefs": ["lc:RT:bf2:WorkTitle,lc:RT:bf2:VarTitle"],
                                "useValuesFrom": [],
                                "defaults": [],
                                "valueDataType": {},
                            },
                        },
                        {
                            "propertyURI": "http://id.loc.gov/ontologies/bibframe/language",
                            "propertyLabel": "Language",
                            "mandatory": "false",
                            "type": "lookup",
                            "valueConstraint": {
                                "valueTemplateRefs": [],
                                "useValuesFrom": ["http://id.loc.gov/vocabulary/languages"],
                                "defaults": [
                                    {
                                        "defaultURI": "http://id.loc.gov/vocabulary/languages/eng",
                                        "defaultLiteral": "English",
                                    }
                                ],
                                "repeatable": "true",
                                "valueDataType": {},
                            },
                        },
                        {
                            "propertyURI": "http://id.loc.gov/ontologies/bibframe/note",
                            "propertyLabel": "Note",
                            "type": "literal",
                            "remark": "Free text",
                            "valueConstraint": {
                                "valueTemplateRefs": [],
                                "useValuesFrom": [],
                                "defaults": [],
                                "valueDataType": {"dataTypeURI": "http://www.w3.org/2001/XMLSchema#string"},
                            },
                        },
                    ],
                },
            ],
        }
    },
    "metadata": {"createDate": "2024-01-01T00:00:00.000Z", "updateDate": "2024-01-01T00:00:00.000Z"},
    "created": "2024-01-01T00:00:00.000Z",
    "modified": "2024-01-01T00:00:00.000Z",
}

# A profile with one template holding one literal property.
MINIMAL_PROFILE_DOCUMENT = {
    "id": "doc-min",
    "name": "Minimal",
    "configType": "profile",
    "json": {
        "Profile": {
            "id": "lc:profile:test:Min",
            "title": "Minimal",
            "resourceTemplates": [
                {
                    "id": "lc:RT:test:Min",
                    "resourceLabel": "Minimal template",
                    "propertyTemplates": [
                        {
                            "propertyURI": "http://purl.org/dc/terms/title",
                            "propertyLabel": "Title",
                            "type": "literal",
                            "valueConstraint": {},
                        }
                    ],
                }
            ],
        }
    },
}

NO_PROFILE_DOCUMENT = {
    "id": "doc-empty",
    "name": "Broken",
    "configType": "profile",
    "json": {},
}
