"""Domain layer: catalog entities, source records, ports and exceptions."""
