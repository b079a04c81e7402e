"""HTTP API for Prompt Maker."""
