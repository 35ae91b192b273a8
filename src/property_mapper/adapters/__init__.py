"""Default collaborators: type introspection, name tokenizers, matching strategies."""
