"""Models and validators for the indexify service API."""
