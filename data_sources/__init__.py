"""Remote data sources: HTTP transport and the OSRS Wiki prices client."""
