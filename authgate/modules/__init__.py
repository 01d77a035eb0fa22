"""Gateway modules, each exposing a black-box interface from its package."""
