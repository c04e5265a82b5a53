"""Client portal dashboard core: status derivation and view-model assembly."""
