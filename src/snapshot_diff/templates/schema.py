"""
JSON schema of the column-template file.

The file is an array of ``{"headerId", "templateName", "indices"}`` objects.
The array itself is validated strictly; entries are validated one by one so
a single bad entry can be reported and skipped.
"""

TEMPLATE_ENTRY_SCHEMA = {
    "type": "object",
    "properties": {
        "headerId": {"type": "string"},
        "templateName": {"type": "string"},
        "indices": {
            "type": "array",
            "items": {"type": "integer", "minimum": 0},
        },
    },
    "required": ["headerId", "templateName", "indices"],
}

TEMPLATE_FILE_SCHEMA = {
    "type": "array",
}
