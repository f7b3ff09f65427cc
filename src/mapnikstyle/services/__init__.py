"""Service layer: orchestrates translation and returns ServiceResult."""
