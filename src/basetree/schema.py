# src/basetree/schema.py
"""
Runtime JSON-Schema for the manifest document.

Only the type tag is enforced: every value must be an object carrying a
string ``type``.  Everything else is interpreted by ``basetree.manifest``.
"""

MANIFEST_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "BasetreeManifest",
    "type": "object",
    "additionalProperties": {
        "type": "object",
        "required": ["type"],
        "properties": {
            "type": {"type": "string"},
        },
    },
}
