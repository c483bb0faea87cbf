"""
LC starting-point test fixtures.
"""

# =============================================================================
# Starting Point Documents
# =============================================================================

STARTING_POINTS_DOCUMENT = [
    {
        "id": "sp-1",
        "name": "config",
        "configType": "startingPoints",
        "json": [
            {
                "menuGroup": "Monograph",
                "menuItems": [
                    {
                        "label": "Instance",
                        "type": ["http://id.loc.gov/ontologies/bibframe/Instance"],
                        "useResourceTemplates": ["lc:RT:bf2:Monograph:Instance"],
                    },
                    {
                        "label": "Work",
                        "type": ["http://id.loc.gov/ontologies/bibframe/Work"],
                        "useResourceTemplates": ["lc:RT:bf2:Monograph:Work"],
                    },
                ],
            },
            {
                "menuGroup": "Notated Music",
                "menuItems": [
                    {
                        "label": "Notated Music Work",
                        "type": ["http://id.loc.gov/ontologies/bibframe/NotatedMusic"],
                        "useResourceTemplates": ["lc:RT:bf2:NotatedMusic:Work"],
                    }
                ],
            },
        ],
    }
]

NO_CONFIG_DOCUMENT = [{"id": "x", "name": "other", "configType": "profile", "json": {}}]

NO_GROUPS_DOCUMENT = [{"id": "sp-2", "name": "config", "configType": "startingPoints", "json": []}]
