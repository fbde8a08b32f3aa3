"""Schema groups for the workflow platform's command catalog.

Each module defines the payload models of one domain and exposes them as a
`SchemaGroup` named `COMMANDS`.
"""
