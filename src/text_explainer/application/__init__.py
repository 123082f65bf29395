"""Application layer: orchestration of the explanation core."""
