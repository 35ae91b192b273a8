"""Implicit matching engine: path tracking, traversal and disambiguation."""
