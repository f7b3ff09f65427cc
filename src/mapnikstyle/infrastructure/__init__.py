"""Infrastructure adapters: markup codec and neutral document loading."""
