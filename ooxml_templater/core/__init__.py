"""GUI-agnostic core of the templater: models, collaborators, parsers, services."""
