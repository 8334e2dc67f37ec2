"""GraphQL documents and fragments."""
