"""Click commands for the contact importer CLI."""
